"""
core/errors.py
──────────────
Error kinds and the ``Result`` container used between the coordinator and
the HTTP layer.

The coordinator never raises for an expected failure.  It returns
``Result.ok(payload)`` or ``Result.err(error)`` where ``error`` is one of:

- :class:`ClientInputError`: a required parameter is missing or invalid
  (rendered as HTTP 400).
- :class:`UpstreamError`: the Yahoo Finance call failed for any reason
  (rendered as HTTP 500).

Only ``app/api/responses.py`` turns these into status codes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

_UNSET: Any = object()


@dataclass(frozen=True)
class ClientInputError:
    """A request parameter was missing or could not be parsed."""

    message: str
    status_code: int = 400

    def envelope(self) -> Dict[str, str]:
        return {"erro": self.message}


@dataclass(frozen=True)
class UpstreamError:
    """
    The upstream provider call failed.

    ``details`` carries the raw provider error text and is only set by
    routes that expose it to clients.
    """

    message: str
    details: Optional[str] = None
    status_code: int = 500

    def envelope(self) -> Dict[str, str]:
        body = {"erro": self.message}
        if self.details is not None:
            body["detalhes"] = self.details
        return body


ServiceError = Union[ClientInputError, UpstreamError]


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """
    Either a success value or an error, never both.

    Example:
        >>> r = Result.ok({"symbol": "PETR4.SA"})
        >>> r.is_ok, r.value["symbol"]
        (True, 'PETR4.SA')
    """

    _value: Any = _UNSET
    _error: Any = _UNSET

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is _UNSET

    @property
    def is_err(self) -> bool:
        return not self.is_ok

    @property
    def value(self) -> T:
        if self.is_err:
            raise ValueError(f"Called value on Result.err: {self._error!r}")
        return self._value

    @property
    def error(self) -> E:
        if self.is_ok:
            raise ValueError("Called error on Result.ok")
        return self._error
