from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from user_registry.db.store import UserStore, get_store
from user_registry.models.schemas import (
    ErrorDetailResponse,
    ErrorResponse,
    UserCreateRequest,
    UserListResponse,
    UserRecord,
)
from user_registry.services.user_service import UserValidationError, create_user, list_users
from user_registry.services.validation import Violation

router = APIRouter(tags=["users"])


def _describe_decode_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


def describe_violation(violation: Violation) -> str:
    return f"{violation.field} field has an error because of that tag {violation.tag}"


@router.post("/user", response_model=UserRecord)
async def create_user_endpoint(request: Request, store: UserStore = Depends(get_store)) -> UserRecord | Response:
    body = await request.body()
    try:
        payload = UserCreateRequest.model_validate_json(body)
    except ValidationError as exc:
        return PlainTextResponse(
            f"There was an error while binding json -> Error {_describe_decode_error(exc)}",
            status_code=400,
        )

    try:
        return create_user(store=store, request=payload)
    except UserValidationError as exc:
        error = ErrorResponse(
            status=400,
            error_detail=[
                ErrorDetailResponse(field_name=v.field, description=describe_violation(v)) for v in exc.violations
            ],
        )
        return JSONResponse(status_code=400, content=error.model_dump(by_alias=True))


@router.get("/user", response_model=UserListResponse)
def list_users_endpoint(store: UserStore = Depends(get_store)) -> UserListResponse | Response:
    users = list_users(store=store)
    if users is None:
        return PlainTextResponse("There is no user", status_code=404)
    return users


@router.get("/user/{user_id}", response_class=PlainTextResponse)
def get_user_by_id(user_id: str) -> str:
    return f"User id is {user_id}"
