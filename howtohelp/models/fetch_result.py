"""
Explicit outcome of a CMS fetch.

The content client never raises to its callers. Instead it hands back a
FetchResult that is either a success carrying the decoded ``data`` member of
the response envelope, or a failure carrying the kind of error and a reason.
Resolvers then decide which empty default applies.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class FetchErrorKind(str, Enum):
    """Failure taxonomy for CMS requests."""
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED = "malformed"


class FetchResult(BaseModel):
    """Success-with-value or failure-with-reason."""
    ok: bool
    data: Any = None
    error_kind: Optional[FetchErrorKind] = None
    status_code: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, data: Any, status_code: Optional[int] = 200) -> "FetchResult":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(
        cls,
        kind: FetchErrorKind,
        reason: str,
        status_code: Optional[int] = None,
    ) -> "FetchResult":
        return cls(ok=False, error_kind=kind, reason=reason, status_code=status_code)

    @property
    def is_not_found(self) -> bool:
        return self.error_kind == FetchErrorKind.HTTP_STATUS and self.status_code == 404
