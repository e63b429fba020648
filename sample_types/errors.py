from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AppError(Exception):
    """Base error for the workspace packages.

    `message` is meant to be readable by whoever runs the process; anything
    machine-oriented goes in `details`.
    """

    code: str
    message: str
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class ConfigError(AppError):
    def __init__(self, message: str = "Invalid configuration", *, code: str = "invalid_config", details: Any | None = None):
        super().__init__(code=code, message=message, details=details)


class UpstreamError(AppError):
    def __init__(
        self,
        message: str = "Upstream Service Error",
        *,
        code: str = "upstream_error",
        details: Any | None = None,
    ):
        super().__init__(code=code, message=message, details=details)
