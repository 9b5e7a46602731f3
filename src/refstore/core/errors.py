from __future__ import annotations


class RefStoreError(Exception):
    """Base class for errors raised by refstore."""


class InvalidArgumentError(RefStoreError, ValueError):
    """A region, range or sequence failed validation."""


class ReaderClosedError(RefStoreError, RuntimeError):
    """An operation was attempted on a released reader or iterable."""
