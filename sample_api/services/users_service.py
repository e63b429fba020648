from __future__ import annotations

from sample_types.users import User

# Served as-is to every request; models are frozen so the tuple is safe to share.
USERS: tuple[User, ...] = (
    User(id="1", email="admin@example.com", name="Admin", role="admin"),
)


def list_users() -> list[User]:
    return list(USERS)
