# Pydantic schemas for user-related requests/responses
# fastapi-users already provides the base fields (id, email, is_active, ...)

from uuid import UUID
from fastapi_users import schemas


class UserRead(schemas.BaseUser[UUID]):
    pass


class UserCreate(schemas.BaseUserCreate):
    pass


class UserUpdate(schemas.BaseUserUpdate):
    pass
