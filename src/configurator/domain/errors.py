"""Domain exceptions."""

from __future__ import annotations


class DomainError(Exception):
    """Raised when an engine function is called with an inconsistent input.

    This signals a bug in the calling layer (for example assembling an
    unvalidated configuration, or a row-height count that does not match the
    row count), not a user-facing condition. It is never caught inside the
    engine.
    """

    pass
