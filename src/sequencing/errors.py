"""Errors raised when the ordering engine is called incorrectly.

Unavailable moves are an ordinary outcome and are reported through ``None``
or ``False`` return values. The exceptions below signal caller bugs such as
passing an item that lives in another sequence.
"""
from __future__ import annotations


class OrderingError(Exception):
    """Base error for invalid use of the ordering engine."""


class ItemNotFoundError(OrderingError, KeyError):
    """Raised when an item is not a member of the sequence it was passed with."""


class ScopeMismatchError(OrderingError, ValueError):
    """Raised when an item is paired with a sequence of a different scope."""


class InvariantViolation(OrderingError, AssertionError):
    """Raised when a sequence breaks a lock or link invariant."""


class DuplicateItemError(ScopeMismatchError):
    """Raised when one id would occupy two slots of a sequence."""
