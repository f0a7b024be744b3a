from __future__ import annotations

from threading import Lock

from fastapi import Request

from user_registry.models.schemas import UserRecord


class UserStore:
    """Process-local, append-only user list (resets on restart).

    All access goes through the lock; readers get a copy of the list.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: list[UserRecord] = []

    def append(self, user: UserRecord) -> None:
        with self._lock:
            self._users.append(user)

    def snapshot(self) -> list[UserRecord]:
        with self._lock:
            return list(self._users)

    def count(self) -> int:
        with self._lock:
            return len(self._users)


def get_store(request: Request) -> UserStore:
    return request.app.state.user_store
