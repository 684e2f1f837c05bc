from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    INVALID_BODY = "invalid_body"
    MISSING_DATA = "missing_data"


class CallResult(BaseModel, Generic[T]):
    """Outcome of one remote call: either a value or a typed failure.

    Callers check ``ok`` and skip the dependent step when it is False; nothing
    is raised for a failed remote call.
    """

    label: str = ""
    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Any, label: str = "", status_code: Optional[int] = None) -> "CallResult":
        return cls(label=label, value=value, status_code=status_code)

    @classmethod
    def fail(cls, kind: FailureKind, reason: str, label: str = "",
             status_code: Optional[int] = None) -> "CallResult":
        return cls(label=label, failure=kind, reason=reason, status_code=status_code)

    def then(self, extract: Callable[[Any], Any], missing: str = "") -> "CallResult":
        """Narrow a successful value; an empty result becomes a MISSING_DATA failure."""
        if not self.ok:
            return self
        try:
            narrowed = extract(self.value)
        except (KeyError, IndexError, TypeError, AttributeError, ValueError):
            narrowed = None
        if narrowed is None:
            return CallResult.fail(FailureKind.MISSING_DATA, missing or "response carried no data",
                                   label=self.label, status_code=self.status_code)
        return CallResult.success(narrowed, label=self.label, status_code=self.status_code)

    def describe(self) -> str:
        if self.ok:
            return f"{self.label}: ok"
        code = f" [{self.status_code}]" if self.status_code else ""
        return f"{self.label}: {self.failure.value}{code} {self.reason or ''}".rstrip()
