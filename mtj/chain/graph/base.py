# -*- coding: utf-8 -*-
from logging import getLogger
from random import random
import sys

from sqlalchemy import create_engine
from sqlalchemy import func
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import scoped_session
from sqlalchemy.orm import sessionmaker

from sqlalchemy.exc import SQLAlchemyError

from ..exc import GraphClosedError
from ..exc import GraphIntegrityError
from ..exc import NoStateError
from ..exc import ResourceError
from ..model import base
from ..model import state
from ..utils import pair
from ..utils import uniform_index

logger = getLogger(__name__)


class StateGraph(base.StateGraph):
    """
    Generic in-memory state graph implementation.

    The states are kept in an sqlite database that lives for as long as
    this graph does; the primary key of each state is its index within
    the graph, and transitions reference states only by these keys.  The
    values owned by the states never enter the database, they are held
    in the values mapping of the graph.
    """

    def __init__(self, capabilities=None, db_src='sqlite://',
                 random_source=None,
                 max_length=50,
                 max_start_attempts=1000,
                 output=None,
                 ):
        self.model = declarative_base(name=type(self).__name__)
        self.classes = {}
        self.modules = [state]
        self.db_src = db_src

        if capabilities is None:
            capabilities = base.Capabilities()
        self.capabilities = capabilities

        # callable returning a float within [0, 1)
        self.random = random_source or random
        # default maximum number of states rendered per walk.
        self.max_length = max_length
        self.max_start_attempts = max_start_attempts
        # stream to render into, sys.stdout at time of use if None.
        self.output = output

    def initialize(self, **kw):
        if hasattr(self, 'engine'):
            logger.info('Graph already initialized')
            return

        self.engine = create_engine(self.db_src, **kw)

        # manually doing the mixin here so that every graph has its own
        # set of mapped classes and tables.
        for module in self.modules:
            for clsname in module.__all__:
                basecls = getattr(module, clsname)
                if issubclass(basecls, base.Node):
                    self.classes[clsname] = type(
                        clsname,
                        (basecls, self.model),
                        {}
                    )

        self.StateNode = self.classes['StateNode']
        # the values owned by the states, by state id.
        self.values = self.StateNode.values = {}
        self.Transition = self.classes['Transition']

        self.model.metadata.create_all(self.engine)
        self._sessions = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False))

    def session(self):
        try:
            sessions = self._sessions
        except AttributeError:
            raise GraphClosedError('graph is not initialized')
        return sessions()

    # State registry

    def find(self, value):
        """
        Return the first state that is equal to value, or None.
        """

        equals = self.capabilities.equals
        for node in self.nodes():
            if equals(node.value, value):
                return node
        return None

    def insert(self, value):
        """
        Add a new state holding a duplicate of value, without checking
        whether an equal one exists.  Use get_or_insert instead.
        """

        session = self.session()
        try:
            owned = self.capabilities.duplicate(value)
        except MemoryError:
            logger.exception('Failed to duplicate value: %r', value)
            raise ResourceError('failed to duplicate %r' % (value,))

        node = self.StateNode()
        node_id = None
        try:
            session.add(node)
            session.flush()
            node_id = node.id
            self.values[node_id] = owned
            session.commit()
        except (SQLAlchemyError, MemoryError):
            logger.exception('Failed to insert value: %r', value)
            session.rollback()
            # the id may be handed out again.
            self.values.pop(node_id, None)
            self.capabilities.release(owned)
            raise ResourceError('failed to insert %r' % (value,))
        return node

    def get_or_insert(self, value):
        node = self.find(value)
        if node is None:
            node = self.insert(value)
        return node

    def size(self):
        session = self.session()
        return session.query(func.count(self.StateNode.id)).one()[0]

    def nodes(self):
        """
        Return all states, in the order they were inserted.
        """

        session = self.session()
        return session.query(self.StateNode).order_by(self.StateNode.id).all()

    def node_at(self, index):
        session = self.session()
        return session.query(self.StateNode).order_by(
            self.StateNode.id).offset(index).first()

    def first(self):
        return self.node_at(0)

    # Transitions

    def record_transition(self, source, target):
        """
        Record one observation of target following source, returning
        the outgoing entry of source that was created or updated.
        """

        equals = self.capabilities.equals
        session = self.session()
        try:
            for transition in source.outgoing:
                if equals(transition.target.value, target.value):
                    transition.frequency += 1
                    break
            else:
                transition = self.Transition(source, target)
                session.add(transition)
            session.commit()
        except (SQLAlchemyError, MemoryError):
            logger.exception(
                'Failed to record transition: %r -> %r', source, target)
            # reverts the frequency or the new entry along with it.
            session.rollback()
            raise ResourceError(
                'failed to record transition %r -> %r' % (source, target))
        return transition

    def learn(self, values):
        """
        Learn a sequence of values, returning the states for each of
        them.
        """

        nodes = [self.get_or_insert(value) for value in values]
        for source, target in pair(nodes):
            self.record_transition(source, target)
        return nodes

    # Walks

    def pick_start(self):
        """
        Return a state, uniformly drawn from all the states that are not
        terminal.
        """

        count = self.size()
        if not count:
            raise NoStateError('no states in graph')

        is_terminal = self.capabilities.is_terminal
        for attempt in range(self.max_start_attempts):
            node = self.node_at(uniform_index(self.random, count))
            if not is_terminal(node.value):
                logger.debug('picked start state_id %d', node.id)
                return node

        raise NoStateError(
            'no non-terminal state found in %d attempts' %
            self.max_start_attempts)

    def pick_next(self, node):
        """
        Return a successor of node, drawn with probability proportional
        to the frequency of the transition, or None if node has no
        successors.
        """

        outgoing = node.outgoing
        if not outgoing:
            return None

        total = sum(transition.frequency for transition in outgoing)
        if total <= 0:
            raise GraphIntegrityError(
                'state_id %d has a total frequency of %d' % (node.id, total))

        r = uniform_index(self.random, total)
        acc = 0
        for transition in outgoing:
            acc += transition.frequency
            if acc > r:
                return transition.target

        raise GraphIntegrityError(
            'no transition from state_id %d covers %d' % (node.id, r))

    def walk(self, start=None, max_length=None):
        """
        Return an iterator of states, beginning with start (or a random
        starting state) and following the transitions.

        The walk ends once max_length states were produced, a terminal
        state was produced, or the last state produced has no successors.
        """

        if max_length is None:
            max_length = self.max_length
        if max_length < 1:
            raise ValueError('max_length must be at least 1')

        if start is None:
            start = self.pick_start()

        return self._walk(start, max_length)

    def _walk(self, node, max_length):
        is_terminal = self.capabilities.is_terminal

        yield node
        length = 1
        while length < max_length:
            if is_terminal(node.value):
                logger.debug('walk ended at terminal state_id %d', node.id)
                return
            node = self.pick_next(node)
            if node is None:
                logger.debug('walk ended at a state with no successors')
                return
            yield node
            length += 1

    def generate(self, start=None, max_length=None, stream=None,
                 default=NotImplemented):
        """
        Render a walk into stream, and return the list of values that
        were rendered.

        If there is no state to start from, default is returned if it
        was provided.
        """

        try:
            nodes = self.walk(start, max_length)
        except NoStateError:
            if default is NotImplemented:
                raise
            return default

        if stream is None:
            stream = self.output if self.output is not None else sys.stdout

        render = self.capabilities.render
        result = []
        for node in nodes:
            render(node.value, stream)
            result.append(node.value)
        return result

    def destroy(self):
        """
        Release every value owned by the states, then the storage of the
        states and transitions.  The graph is unusable afterwards.
        """

        if not hasattr(self, 'engine'):
            return

        release = self.capabilities.release
        try:
            for node in self.nodes():
                release(self.values.pop(node.id))
        finally:
            self.values.clear()
            self._sessions.remove()
            self.model.metadata.drop_all(self.engine)
            self.engine.dispose()
            del self._sessions
            del self.engine
