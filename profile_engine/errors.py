"""
Domain exceptions for the student profiles engine.

Notes
-----
Storage failures are not exceptions in this engine. Backends report them as
boolean results and the stores surface them as ``WriteResult`` values, so the
in-memory state always stays usable. The exceptions below cover caller
mistakes only.
"""

from __future__ import annotations


class ProfileAppError(RuntimeError):
    """Base exception for all engine domain failures."""


class LifecycleError(ProfileAppError):
    """Raised when the load phase is started more than once."""


class StateNotReadyError(ProfileAppError):
    """Raised when state is read or mutated before loading completed."""


class InvalidProfileError(ProfileAppError):
    """Raised when profile form input violates its invariants."""
