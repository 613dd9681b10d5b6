"""Exception classes for slideforge.

Reducers never raise: invalid operations are no-ops and out-of-range values
are clamped. Only the outer seams (snapshot hydration, export requests)
raise these.
"""


class SlideforgeError(Exception):
    """Base exception for slideforge errors."""

    pass


class SnapshotError(SlideforgeError):
    """Raised when a persisted snapshot cannot be hydrated."""

    pass


class ExportRequestError(SlideforgeError):
    """Raised for invalid export selections or options."""

    pass
