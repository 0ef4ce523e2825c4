# -*- coding: utf-8 -*-


class ChainError(Exception):
    """
    Base error for the chain engine.
    """


class ResourceError(ChainError):
    """
    A state could not be duplicated or stored, or a transition could not
    be recorded.  The operation that raised this was abandoned as a
    whole.
    """


class NoStateError(ChainError, KeyError):
    """
    No usable state could be found, e.g. an empty graph or a graph
    where every state is terminal.
    """


class GraphIntegrityError(ChainError, AssertionError):
    """
    The frequency tables no longer agree with each other.
    """


class GraphClosedError(ChainError):
    """
    The graph was not initialized or has already been destroyed.
    """
