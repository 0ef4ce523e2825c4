# -*- coding: utf-8 -*-
from ..model.base import Capabilities


class XorShift128(object):
    """
    Marsaglia's xorshift128, for a random source that gives the same
    values on every platform and Python version.  Instances are usable
    as the random source of a graph.
    """

    mask = 0xFFFFFFFF

    def __init__(self, seed=(126789834, 762898365, 798124191, 169030803)):
        self.state = tuple(seed)
        self.cycle = 0

    def skip(self, n=1):
        # For skipping over unfavorable generated numbers.
        for i in range(n):
            self()

    def __call__(self):
        x, y, z, w = self.state
        t = (x ^ (x << 11)) & self.mask
        result = (w ^ (w >> 19) ^ t ^ (t >> 8)) & self.mask
        self.state = (y, z, w, result)
        self.cycle += 1
        return result / float(self.mask + 1)


class Scripted(object):
    """
    A random source that returns the given values in order, then fails
    loudly so that tests notice an unexpected draw.
    """

    def __init__(self, values):
        self.values = list(values)
        self.cycle = 0

    def __call__(self):
        if self.cycle >= len(self.values):
            raise AssertionError(
                'random source exhausted after %d draws' % self.cycle)
        value = self.values[self.cycle]
        self.cycle += 1
        return value


class TrackingCapabilities(Capabilities):
    """
    Keeps count of the values duplicated into a graph and released by
    it, so that tests can verify every owned value is released exactly
    once.  Values ending with the terminator are terminal.
    """

    def __init__(self, terminator='.'):
        self.terminator = terminator
        self.duplicated = []
        self.released = []

    @property
    def live(self):
        return len(self.duplicated) - len(self.released)

    def duplicate(self, value):
        result = super(TrackingCapabilities, self).duplicate(value)
        self.duplicated.append(result)
        return result

    def release(self, value):
        self.released.append(value)

    def is_terminal(self, value):
        return value.endswith(self.terminator)


class FailingCapabilities(TrackingCapabilities):
    """
    Fails to duplicate the listed values.
    """

    def __init__(self, failures=(), **kw):
        super(FailingCapabilities, self).__init__(**kw)
        self.failures = set(failures)

    def duplicate(self, value):
        if value in self.failures:
            raise MemoryError('cannot duplicate %r' % (value,))
        return super(FailingCapabilities, self).duplicate(value)
