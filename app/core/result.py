"""Explicit success/failure values for outbound calls.

Callers must inspect the result instead of relying on exceptions:

    result = exchange_code(code)
    if isinstance(result, Err):
        ...
    tokens = result.value
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """
    Failure of an outbound call.

    - kind        : short machine-readable category ("invalid_grant", "network", ...)
    - detail      : human-readable description
    - status_code : upstream HTTP status, when a response was received
    - body        : upstream response body (parsed JSON when possible)
    """

    kind: str
    detail: str = ""
    status_code: Optional[int] = None
    body: Any = field(default=None)

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
