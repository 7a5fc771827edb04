"""Exceptions raised by the generators."""

from __future__ import annotations


class StarforgeError(Exception):
    """Base class for every generation failure."""


class DomainViolationError(StarforgeError, ValueError):
    """A roll, lookup key or option fell outside its closed domain."""


class ConstraintExhaustedError(DomainViolationError):
    """No companion class/grade exists that is dimmer than the primary."""


class MissingReferenceDataError(StarforgeError, LookupError):
    """The stellar property source had no record for a valid class and grade."""
