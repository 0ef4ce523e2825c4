# -*- coding: utf-8 -*-
"""
Snakes and ladders.

Every cell of the board is a state, and the transitions out of a cell
are either the single jump of the ladder or snake starting from it, or
one for each face of the dice.
"""

from collections import namedtuple
from logging import getLogger

from . import base

logger = getLogger(__name__)

__all__ = [
    'Cell', 'BoardCapabilities', 'Loader',
]

EMPTY = -1
BOARD_SIZE = 100
DICE_MAX = 6
MAX_GENERATION_LENGTH = 60

ARROW = '->'
LADDER_TO = '-ladder to'
SNAKE_TO = '-snake to'

# (from, to) - a ladder if from < to, otherwise a snake.
LADDERS_AND_SNAKES = (
    (13, 4),
    (85, 17),
    (95, 67),
    (97, 58),
    (66, 89),
    (87, 31),
    (57, 83),
    (91, 25),
    (28, 50),
    (35, 11),
    (8, 30),
    (41, 62),
    (81, 43),
    (69, 32),
    (20, 39),
    (33, 70),
    (79, 99),
    (23, 76),
    (15, 47),
    (61, 14),
)


class Cell(namedtuple('Cell', ['number', 'ladder_to', 'snake_to'])):
    """
    A cell on the board, numbered from 1.
    """

    __slots__ = ()

    def __new__(cls, number, ladder_to=EMPTY, snake_to=EMPTY):
        return super(Cell, cls).__new__(cls, number, ladder_to, snake_to)

    @property
    def jump_to(self):
        """
        The cell number the ladder or snake leads to, or EMPTY.
        """

        return max(self.ladder_to, self.snake_to)


def create_board(size=BOARD_SIZE, transitions=LADDERS_AND_SNAKES):
    """
    Return the list of cells for a board, with the ladders and snakes
    placed.
    """

    cells = [Cell(number) for number in range(1, size + 1)]
    for start, end in transitions:
        cell = cells[start - 1]
        if start < end:
            cells[start - 1] = cell._replace(ladder_to=end)
        else:
            cells[start - 1] = cell._replace(snake_to=end)
    return cells


class BoardCapabilities(base.Capabilities):

    def __init__(self, size=BOARD_SIZE):
        self.size = size

    def equals(self, a, b):
        return a.number == b.number

    def render(self, cell, stream):
        stream.write('[%d]' % cell.number)
        if cell.number == self.size:
            return
        if cell.ladder_to > EMPTY:
            stream.write('%s %d %s ' % (LADDER_TO, cell.ladder_to, ARROW))
        elif cell.snake_to > EMPTY:
            stream.write('%s %d %s ' % (SNAKE_TO, cell.snake_to, ARROW))
        else:
            stream.write(' %s ' % ARROW)

    def is_terminal(self, cell):
        return cell.number == self.size


class Loader(base.Loader):

    def __init__(self, graph, size=BOARD_SIZE, dice_max=DICE_MAX,
                 transitions=LADDERS_AND_SNAKES):
        super(Loader, self).__init__(graph)
        self.size = size
        self.dice_max = dice_max
        self.transitions = transitions

    def __call__(self):
        """
        Fill the graph with the board, returning the state for each
        cell.
        """

        graph = self.graph
        cells = create_board(self.size, self.transitions)
        nodes = [graph.get_or_insert(cell) for cell in cells]

        for node in nodes:
            cell = node.value
            if cell.jump_to != EMPTY:
                graph.record_transition(node, nodes[cell.jump_to - 1])
                continue
            for roll in range(1, self.dice_max + 1):
                index = cell.number + roll - 1
                if index >= self.size:
                    break
                graph.record_transition(node, nodes[index])

        logger.debug('loaded board of %d cells', len(nodes))
        return nodes
