#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the goastor library.

This module defines the exception classes raised while inspecting and
rewriting Go syntax trees.

Exception Hierarchy
-------------------
- GoAstorError (base exception)

  - InspectionError (traversal protocol misuse)
    - StaleCursorError (replacement requested after the visit ended)
    - NodeShapeError (replacement incompatible with its child slot)

  - UnknownNodeTypeError (dispatch table does not cover a node class)

  - TreeDepthError (tree nested beyond the recursion limit)

"""

from typing import Any


class GoAstorError(Exception):
    """Base exception class for all goastor-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class InspectionError(GoAstorError):
    """Exception raised when a visitor breaks the inspection protocol."""


class StaleCursorError(InspectionError):
    """Exception raised when ``Cursor.replace`` is called after its visit returned.

    A cursor is only valid while the visitor call it was created for is
    running. Holding on to it and replacing later would write into a slot the
    inspector has already moved past.

    """


class NodeShapeError(InspectionError, TypeError):
    """Exception raised when a replacement does not fit the child slot it lands in.

    Parameters
    ----------
    owner : str
        Class name of the node owning the slot
    field_name : str
        Name of the child field (with an index for list slots)
    expected : type
        Node class or family the slot accepts
    received : Any
        The value the inspection produced for the slot

    Attributes
    ----------
    owner : str
        Class name of the node owning the slot
    field_name : str
        Name of the child field
    expected_type : type
        Accepted node class or family
    received_type : type
        Type of the rejected value

    """

    def __init__(self, owner: str, field_name: str, expected: type, received: Any):
        """Initialize the shape error with slot details."""
        self.owner = owner
        self.field_name = field_name
        self.expected_type = expected
        self.received_type = type(received)
        message = (
            f"{owner}.{field_name} expects {expected.__name__}, "
            f"got {self.received_type.__name__}"
        )
        super().__init__(message)


class UnknownNodeTypeError(GoAstorError):
    """Exception raised when the inspector reaches a node class it cannot dispatch.

    The node grammar is closed; hitting this error means the dispatch table is
    out of sync with the tree being walked. It is not raised for bad data and
    must not be caught to continue a walk.

    Parameters
    ----------
    node_type : type
        The class that has no dispatch entry

    Attributes
    ----------
    node_type : type
        The class that has no dispatch entry

    """

    def __init__(self, node_type: type):
        """Initialize the error for the unhandled class."""
        super().__init__(f"goastor.inspect: unexpected node type {node_type.__name__}")
        self.node_type = node_type


class TreeDepthError(GoAstorError):
    """Exception raised when a tree is nested too deeply to walk.

    The inspector recurses once per tree level, so the interpreter's recursion
    limit bounds the depth it can handle. Raising the limit with
    ``sys.setrecursionlimit`` lets deeper trees through.

    Parameters
    ----------
    depth : int
        Number of tree levels entered when the limit was hit
    recursion_limit : int
        The interpreter recursion limit in effect
    original_error : RecursionError, optional
        The error raised by the interpreter

    Attributes
    ----------
    depth : int
        Number of tree levels entered when the limit was hit
    recursion_limit : int
        The interpreter recursion limit in effect

    """

    def __init__(self, depth: int, recursion_limit: int, original_error: Exception | None = None):
        """Initialize the error with the depth reached."""
        super().__init__(
            f"Tree is too deep to inspect: gave up after {depth} levels (recursion limit {recursion_limit})",
            original_error=original_error,
        )
        self.depth = depth
        self.recursion_limit = recursion_limit


__all__ = [
    "GoAstorError",
    "InspectionError",
    "StaleCursorError",
    "NodeShapeError",
    "UnknownNodeTypeError",
    "TreeDepthError",
]
