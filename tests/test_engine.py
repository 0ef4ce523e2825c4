import unittest
from io import StringIO

from mtj.chain.engine import create_registry
from mtj.chain.engine import destroy_registry
from mtj.chain.engine import generate
from mtj.chain.engine import get_or_insert
from mtj.chain.engine import record_transition
from mtj.chain.exc import GraphClosedError
from mtj.chain.model.board import BoardCapabilities
from mtj.chain.model.board import Cell
from mtj.chain.model.text import TextCapabilities

from mtj.chain.testing import TrackingCapabilities
from mtj.chain.testing import XorShift128


def transitions(node):
    return [(target.value, freq) for target, freq in node.list_transitions()]


class EngineTestCase(unittest.TestCase):

    def build(self, registry, a, b, c):
        na = get_or_insert(registry, a)
        nb = get_or_insert(registry, b)
        record_transition(registry, na, nb)
        nb = get_or_insert(registry, b)
        nc = get_or_insert(registry, c)
        record_transition(registry, nb, nc)
        return na, nb, nc

    def test_three_words(self):
        registry = create_registry(
            TextCapabilities(), random_source=XorShift128())
        self.addCleanup(destroy_registry, registry)
        a, b, c = self.build(registry, 'a', 'b', 'c.')

        self.assertEqual(registry.size(), 3)
        self.assertEqual(transitions(a), [('b', 1)])
        self.assertEqual(transitions(b), [('c.', 1)])
        self.assertEqual(transitions(c), [])

        stream = StringIO()
        result = generate(registry, a, 10, stream=stream)
        self.assertEqual(result, ['a', 'b', 'c.'])
        self.assertEqual(stream.getvalue(), ' a b c.')

    def test_three_cells(self):
        capabilities = BoardCapabilities()
        registry = create_registry(capabilities, random_source=XorShift128())
        self.addCleanup(destroy_registry, registry)
        a, b, c = self.build(registry, Cell(98), Cell(99), Cell(100))

        self.assertEqual(registry.size(), 3)
        self.assertEqual(transitions(a), [(Cell(99), 1)])
        self.assertEqual(transitions(b), [(Cell(100), 1)])
        self.assertEqual(transitions(c), [])

        stream = StringIO()
        result = generate(registry, a, 10, stream=stream)
        self.assertEqual([cell.number for cell in result], [98, 99, 100])
        self.assertEqual(stream.getvalue(), '[98] -> [99] -> [100]')

    def test_destroy_registry(self):
        capabilities = TrackingCapabilities()
        registry = create_registry(capabilities)
        self.build(registry, 'a', 'b', 'c.')
        destroy_registry(registry)
        self.assertEqual(capabilities.live, 0)
        self.assertEqual(len(capabilities.released), 3)
        with self.assertRaises(GraphClosedError):
            get_or_insert(registry, 'a')
