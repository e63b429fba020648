from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard response envelope.

    `status` mirrors the HTTP status code sent with the body. `message` is
    optional and left out of the JSON when unset.
    """

    model_config = ConfigDict(frozen=True)

    data: T
    status: int
    message: str | None = None
