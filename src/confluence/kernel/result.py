"""Success/failure values carried by fallible pollables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

V = TypeVar("V")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[V, E]):
    """
    Output of a fallible computation.

    Failures are ordinary data here: try_join and try_select inspect the
    kind and never rely on exceptions to signal a failed source.

    Attributes:
        kind: "ok" or "err"
        value: Success value (ok only)
        error: Failure value (err only)
    """

    kind: Literal["ok", "err"]
    value: V | None = None
    error: E | None = None

    @staticmethod
    def Ok(value: Any) -> Result[Any, Any]:
        return Result(kind="ok", value=value)

    @staticmethod
    def Err(error: Any) -> Result[Any, Any]:
        return Result(kind="err", error=error)

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"

    @property
    def is_err(self) -> bool:
        return self.kind == "err"

    def unwrap(self) -> V:
        if self.kind != "ok":
            raise ValueError(f"Called unwrap() on an error Result: {self.error!r}")
        return self.value  # type: ignore[return-value]

    def unwrap_err(self) -> E:
        if self.kind != "err":
            raise ValueError(f"Called unwrap_err() on an ok Result: {self.value!r}")
        return self.error  # type: ignore[return-value]
