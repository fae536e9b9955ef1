"""Prepared object store requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Command:
    """A request that has been built but not sent.

    ``operation`` names the S3 client method, ``params`` are its keyword arguments.
    """

    operation: str
    params: dict[str, Any] = field(default_factory=dict)

    def with_params(self, **overrides: Any) -> Command:
        return Command(self.operation, {**self.params, **overrides})

    @property
    def key(self) -> str | None:
        return self.params.get("Key")
