from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["admin", "user"]


class User(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    email: str
    name: str
    role: Role
