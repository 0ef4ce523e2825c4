# -*- coding: utf-8 -*-
"""
The command line programs: random walks on a snakes and ladders board,
and tweets generated from a text corpus.
"""

import argparse
import logging
from logging import getLogger
from random import Random
import sys

from .exc import ChainError
from .graph.base import StateGraph
from .model import board
from .model import text

logger = getLogger(__name__)

RANDOM_WALK = 'Random Walk'
PRINT_TWEET = 'Tweet'
PATH_ERROR = 'Error: The given file is invalid.'


def _configure_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
    )


def _positive_count(value):
    result = int(value)
    if result < 0:
        raise argparse.ArgumentTypeError('%r is negative' % value)
    return result


def snakes_parser():
    parser = argparse.ArgumentParser(
        prog='mtj-snakes',
        description='Random walks on a snakes and ladders board.')
    parser.add_argument('seed', type=int, help='seed of the random source')
    parser.add_argument(
        'count', type=_positive_count, help='number of walks to generate')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def tweets_parser():
    parser = argparse.ArgumentParser(
        prog='mtj-tweets',
        description='Generate tweets from the words of a text file.')
    parser.add_argument('seed', type=int, help='seed of the random source')
    parser.add_argument(
        'count', type=_positive_count, help='number of tweets to generate')
    parser.add_argument('path', help='path to the text file to learn')
    parser.add_argument(
        'words_to_read', type=_positive_count, nargs='?', default=0,
        help='number of words to read from the file (default: all)')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def snakes(seed, count, stream=None):
    """
    Print count random walks across the board, always starting from the
    first cell.
    """

    if stream is None:
        stream = sys.stdout
    graph = StateGraph(
        board.BoardCapabilities(),
        random_source=Random(seed).random,
        max_length=board.MAX_GENERATION_LENGTH,
        output=stream,
    )
    graph.initialize()
    try:
        board.Loader(graph)()
        first = graph.first()
        for i in range(count):
            stream.write('%s %d: ' % (RANDOM_WALK, i + 1))
            graph.generate(first)
            stream.write('\n')
    finally:
        graph.destroy()


def tweets(seed, count, lines, words_to_read=0, stream=None):
    """
    Learn the lines, then print count tweets each starting from a
    random word.
    """

    if stream is None:
        stream = sys.stdout
    graph = StateGraph(
        text.TextCapabilities(),
        random_source=Random(seed).random,
        max_length=text.MAX_WORDS_IN_TWEET,
        output=stream,
    )
    graph.initialize()
    try:
        text.Loader(graph)(lines, words_to_read)
        for i in range(count):
            stream.write('%s %d:' % (PRINT_TWEET, i + 1))
            graph.generate()
            stream.write('\n')
    finally:
        graph.destroy()


def snakes_main(argv=None):
    args = snakes_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        snakes(args.seed, args.count)
    except ChainError:
        logger.exception('Failed to generate walks')
        return 1
    return 0


def tweets_main(argv=None):
    args = tweets_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        # undecodable bytes become U+FFFD rather than ending the program.
        fd = open(args.path, encoding='utf-8', errors='replace')
    except OSError:
        print(PATH_ERROR)
        return 1

    try:
        with fd:
            tweets(args.seed, args.count, fd, args.words_to_read)
    except ChainError:
        logger.exception('Failed to generate tweets')
        return 1
    return 0
