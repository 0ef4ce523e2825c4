# -*- coding: utf-8 -*-
from logging import getLogger
import re

from ..utils import pair
from . import base

logger = getLogger(__name__)

__all__ = [
    'TextCapabilities', 'Loader',
]

MAX_WORDS_IN_TWEET = 20
TERMINATOR = '.'

# space, newline, tab and carriage return only.
delimiters = re.compile('[ \n\t\r]+')


def split_words(line):
    return [word for word in delimiters.split(line) if word]


class TextCapabilities(base.Capabilities):
    """
    Words as states.  A word ending with a full stop ends a sentence.
    """

    def render(self, word, stream):
        stream.write(' ' + word)

    def is_terminal(self, word):
        return word.endswith(TERMINATOR)


class Loader(base.Loader):

    def __call__(self, lines, words_to_read=0):
        """
        Learn the words from lines, which is any iterable of strings
        (such as an open file).  Transitions are only recorded between
        words on the same line, and never out of a word that ends a
        sentence.

        If words_to_read is positive, stop after that many words were
        read in total.  Returns the number of words read.
        """

        graph = self.graph
        is_terminal = graph.capabilities.is_terminal
        remaining = words_to_read if words_to_read > 0 else None
        count = 0

        for line in lines:
            words = split_words(line)
            if remaining is not None:
                words = words[:remaining]
                remaining -= len(words)

            nodes = [graph.get_or_insert(word) for word in words]
            for source, target in pair(nodes):
                if not is_terminal(source.value):
                    graph.record_transition(source, target)

            count += len(words)
            if remaining == 0:
                break

        logger.debug('read %d words, %d distinct', count, graph.size())
        return count
