# -*- coding: utf-8 -*-


def pair(items):
    """
    Return a generator that generates pairs of preceding and subsequent
    items for the given iterable.  Unlike slicing, this works with any
    iterable, including generators.
    """

    iterator = iter(items)
    try:
        previous = next(iterator)
    except StopIteration:
        return
    for item in iterator:
        yield previous, item
        previous = item


def uniform_index(random, count):
    """
    Return an index in [0, count) drawn using the random source, which
    is a callable that returns a float in [0, 1).
    """

    # guard against a source that returns exactly 1.0
    return min(int(random() * count), count - 1)
