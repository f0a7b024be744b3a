from __future__ import annotations

import structlog

from user_registry.db.store import UserStore
from user_registry.models.schemas import UserCreateRequest, UserListResponse, UserRecord
from user_registry.services.identifiers import generate_user_id
from user_registry.services.validation import Violation, validate

logger = structlog.get_logger(__name__)


class UserValidationError(ValueError):
    def __init__(self, violations: list[Violation]) -> None:
        super().__init__(f"{len(violations)} field(s) failed validation")
        self.violations = violations


def create_user(store: UserStore, request: UserCreateRequest) -> UserRecord:
    violations = validate(request.model_dump(by_alias=True))
    if violations:
        raise UserValidationError(violations)

    user = UserRecord(
        uid=generate_user_id(),
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        age=request.age,
    )
    store.append(user)
    logger.info("user.created", uid=user.uid)
    return user


def list_users(store: UserStore) -> UserListResponse | None:
    """Return every stored user in creation order, or ``None`` when there are none."""

    users = store.snapshot()
    if len(users) == 0:
        return None
    return UserListResponse(data=users, count=len(users))
