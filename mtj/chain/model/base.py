# -*- coding: utf-8 -*-
"""
Base modules.
"""

import copy


class Node(object):
    """
    A node within the graph.
    """


class Graph(object):
    """
    The graph.
    """


class Capabilities(object):
    """
    The set of operations the engine needs from the values it tracks as
    states.  The engine never looks inside a value; everything it does
    with one goes through an instance of this class.

    Examples of values:

    - In a text generator, a word.
    - In a board game simulator, a cell on the board.

    The defaults here work for any plain, comparable and printable Python
    value where no state is ever terminal.  Subclass and override to
    describe a specific domain.
    """

    def equals(self, a, b):
        """
        Return True if both values represent the same state.  Must be
        consistent with duplicate, i.e. a duplicate compares equal to
        its original.
        """

        return a == b

    def duplicate(self, value):
        """
        Return a deep copy of value, to be exclusively owned by the
        state node that wraps it.
        """

        return copy.deepcopy(value)

    def render(self, value, stream):
        """
        Write the human readable form of value to stream.
        """

        stream.write(str(value))

    def release(self, value):
        """
        Free any resources held by a value previously produced by
        duplicate.  Called exactly once per duplicated value.
        """

    def is_terminal(self, value):
        """
        Return True if a generated sequence must stop at this value.
        """

        return False


class State(Node):
    """
    Base class for the representation of a state within a markov chain.

    Each distinct value (as determined by the capabilities) is wrapped
    by exactly one State, which also owns the outgoing transitions.
    """


class StateTransition(Node):
    """
    Base class for describing a directed, frequency weighted transition
    from one State to another.

    For referencing the source or target state, the identifier is
    prefixed with 'source' or 'target', respectively.
    """


class StateGraph(Graph):
    """
    A description containing all state transitions and states for the
    generation of a markov chain.
    """

    def __init__(self, *a, **kw):
        """
        Initialize the graph - it can contain parameters such as the
        capabilities of the values tracked, the random source, etc.
        """

        raise NotImplementedError

    def initialize(self, *a, **kw):
        """
        The actual initialization method.  Attributes relating to
        location of the store for the states and other related attributes
        should be initialized here.
        """

        raise NotImplementedError

    def get_or_insert(self, value):
        """
        Return the State for value, creating it if it does not exist.
        """

        raise NotImplementedError

    def record_transition(self, source, target):
        """
        Record one observation of target following source.
        """

        raise NotImplementedError

    def learn(self, values):
        """
        Turn the values into States and StateTransitions and merge them
        into this StateGraph.
        """

        raise NotImplementedError

    def generate(self, start=None, max_length=None):
        """
        Render up to max_length states, starting from start.

        Default start is implementation specific.
        """

        raise NotImplementedError

    def destroy(self):
        """
        Release every state and transition held by this graph.
        """

        raise NotImplementedError


class Loader(object):
    """
    Feeds some raw, domain specific input into a graph.
    """

    def __init__(self, graph):
        self.graph = graph

    def __call__(self, *a, **kw):
        raise NotImplementedError
