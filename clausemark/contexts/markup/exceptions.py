"""Custom exceptions for the markup context."""

from typing import Optional


class TransformError(Exception):
    """Base class for errors raised while walking a document tree."""


class UnhandledNodeType(TransformError):
    """
    Exception raised when a visitor has no rule for a node tag.

    The traversal is aborted as a whole: callers never receive partial output.

    Attributes:
        tag: Tag of the node that has no rule
        visitor_name: Name of the visitor that was walking the tree
    """

    def __init__(self, tag: str, visitor_name: Optional[str] = None):
        self.tag = tag
        self.visitor_name = visitor_name

        message = f"Unhandled type {tag}"
        if visitor_name:
            message += f" (visitor: {visitor_name})"

        super().__init__(message)


class InvalidNodeError(TransformError, ValueError):
    """
    Exception raised when a JSON document tree is malformed.

    Raised for records with no '$class' discriminator or children that are not
    lists, i.e. trees that cannot even be dispatched on.
    """
