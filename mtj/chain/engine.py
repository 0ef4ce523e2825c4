# -*- coding: utf-8 -*-
"""
Function based access to a StateGraph, for callers that would rather
pass the registry around than hold on to the graph methods.
"""

from .graph.base import StateGraph


def create_registry(capabilities=None, graph_factory=StateGraph, **kw):
    """
    Create and initialize an empty graph for values described by
    capabilities.  Keyword arguments are passed to the graph.
    """

    graph = graph_factory(capabilities, **kw)
    graph.initialize()
    return graph


def get_or_insert(registry, value):
    return registry.get_or_insert(value)


def record_transition(registry, source, target):
    return registry.record_transition(source, target)


def generate(registry, start=None, max_length=None, **kw):
    return registry.generate(start, max_length, **kw)


def destroy_registry(registry):
    registry.destroy()
