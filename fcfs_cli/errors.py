from __future__ import annotations


class InvalidInput(ValueError):
    """
    Raised when a process list cannot be scheduled: empty, duplicate ids, or
    values outside the accepted ranges. Not transient; callers should ask for
    corrected input rather than retry.
    """
