from __future__ import annotations

from typing import Optional


class SalesTrackerError(ValueError):
    """Base class for user-facing errors. Pages show them with st.error(str(e))."""


class ValidationError(SalesTrackerError):
    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(" ".join(self.errors.values()) or "Invalid input.")


class DuplicateError(SalesTrackerError):
    pass


class NotFoundError(SalesTrackerError):
    def __init__(self, what: str, ident: Optional[int] = None):
        self.ident = ident
        msg = f"{what} not found." if ident is None else f"{what} #{ident} not found."
        super().__init__(msg)


class InvalidRangeError(SalesTrackerError):
    pass


class EmptyReportError(SalesTrackerError):
    pass
