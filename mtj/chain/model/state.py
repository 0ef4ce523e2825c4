# -*- coding: utf-8 -*-
from sqlalchemy.orm import declared_attr
from sqlalchemy.orm import relationship
from sqlalchemy.schema import Column
from sqlalchemy.schema import ForeignKey
from sqlalchemy.schema import UniqueConstraint
from sqlalchemy.types import Integer

from . import base

__all__ = [
    'StateNode', 'Transition',
]


class StateNode(base.State):
    """
    A distinct state.  The primary key doubles as the insertion order.

    Only the key is stored in the database; the value owned by this node
    is kept by the graph in its values mapping, keyed by id, so that it
    is never copied or reloaded by the session.
    """

    __tablename__ = 'state'

    id = Column(Integer(), primary_key=True, nullable=False)
    # assigned per graph, see StateGraph.initialize
    values = None

    @declared_attr
    def outgoing(cls):
        return relationship(
            'Transition',
            foreign_keys='Transition.source_id',
            order_by='Transition.id',
            back_populates='source',
            cascade='all, delete-orphan',
        )

    @property
    def value(self):
        return self.values[self.id]

    def __repr__(self):
        return '<StateNode %r: %r>' % (self.id, self.values.get(self.id))

    @property
    def total(self):
        return sum(transition.frequency for transition in self.outgoing)

    def list_transitions(self):
        """
        Return the outgoing transitions as (target, frequency) pairs, in
        the order they were first observed.
        """

        return [(t.target, t.frequency) for t in self.outgoing]


class Transition(base.StateTransition):
    """
    An outgoing entry of a StateNode.  There is at most one of these per
    source and target.
    """

    __tablename__ = 'transition'

    id = Column(Integer(), primary_key=True, nullable=False)
    frequency = Column(Integer(), nullable=False, default=1)

    @declared_attr
    def source_id(cls):
        return Column(
            Integer(), ForeignKey('state.id'), index=True, nullable=False)

    @declared_attr
    def target_id(cls):
        return Column(Integer(), ForeignKey('state.id'), nullable=False)

    @declared_attr
    def source(cls):
        return relationship(
            'StateNode', foreign_keys='Transition.source_id',
            back_populates='outgoing')

    @declared_attr
    def target(cls):
        return relationship('StateNode', foreign_keys='Transition.target_id')

    @declared_attr
    def __table_args__(cls):
        return (UniqueConstraint('source_id', 'target_id'),)

    def __init__(self, source, target, frequency=1):
        self.source = source
        self.target = target
        self.frequency = frequency

    def __repr__(self):
        return '<Transition %r -> %r (%d)>' % (
            self.source_id, self.target_id, self.frequency)
