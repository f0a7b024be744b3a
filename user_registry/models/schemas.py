from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreateRequest(_CamelModel):
    """Decoded POST /user body.

    Every field is optional at decode time so that a missing field surfaces as a
    ``required`` violation rather than a decode error. Strict mode keeps
    ``"age": "20"`` from being coerced into an integer.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, strict=True)

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None
    # Bounded to a signed 32-bit integer; larger values are a decode error.
    age: int | None = Field(default=None, ge=-(2**31), le=2**31 - 1)


class UserRecord(_CamelModel):
    uid: str
    first_name: str
    last_name: str
    email: str
    age: int


class UserListResponse(_CamelModel):
    data: list[UserRecord]
    count: int


class ErrorDetailResponse(_CamelModel):
    field_name: str
    description: str


class ErrorResponse(_CamelModel):
    status: int
    error_detail: list[ErrorDetailResponse] = Field(default_factory=list)
