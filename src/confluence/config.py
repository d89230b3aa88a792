"""Combinator configuration."""

from __future__ import annotations

import os
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict


class CombinatorConfig(BaseModel):
    """Options shared by every combinator factory.

    Attributes:
        error_policy: Which failure try_select reports when every source
            failed: "first" or "last" in declaration order.
        fair_merge: Whether a stream merge wakes itself after yielding a
            left item so the right side gets polled on the next drive.
        label: Name used in log messages, trace events and errors.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    error_policy: Literal["first", "last"] = "first"
    fair_merge: bool = True
    label: str | None = None

    @classmethod
    def from_env(cls, prefix: str = "CONFLUENCE_") -> Self:
        """Build a config from environment variables.

        Reads {prefix}ERROR_POLICY and {prefix}FAIR_MERGE; unset variables
        keep their defaults.
        """
        values: dict[str, object] = {}
        policy = os.environ.get(f"{prefix}ERROR_POLICY")
        if policy:
            values["error_policy"] = policy.strip().lower()
        fair = os.environ.get(f"{prefix}FAIR_MERGE")
        if fair:
            values["fair_merge"] = fair.strip()
        return cls.model_validate(values)

    def with_label(self, label: str | None) -> Self:
        if label is None:
            return self
        return self.model_copy(update={"label": label})


DEFAULT_CONFIG = CombinatorConfig()
