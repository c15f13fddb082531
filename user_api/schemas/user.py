from typing import Optional

from pydantic import BaseModel, ConfigDict

from user_api.core.errors import RequiredFieldsError


class _RequestBody(BaseModel):
    # Fields default to None so require_fields decides what is missing.
    model_config = ConfigDict(coerce_numbers_to_str=True)


class RegisterRequest(_RequestBody):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(_RequestBody):
    email: Optional[str] = None
    password: Optional[str] = None


class CreateUserRequest(_RequestBody):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None


class UpdateUserRequest(CreateUserRequest):
    id: Optional[int] = None


class DeleteUserRequest(_RequestBody):
    id: Optional[int] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    token: str


def require_fields(body: BaseModel, *fields: str, message: str = RequiredFieldsError.default_detail) -> None:
    """Reject the body when any listed field is missing, null, empty or zero."""
    if any(not getattr(body, field) for field in fields):
        raise RequiredFieldsError(message)


# FastAPI dependencies: they run before the token check on protected routes.

def register_body(body: RegisterRequest) -> RegisterRequest:
    require_fields(body, "name", "email", "phone", "password", "role")
    return body


def login_body(body: LoginRequest) -> LoginRequest:
    require_fields(body, "email", "password", message="Email and password are required")
    return body


def create_body(body: CreateUserRequest) -> CreateUserRequest:
    require_fields(body, "name", "email", "phone", "role")
    return body


def update_body(body: UpdateUserRequest) -> UpdateUserRequest:
    require_fields(body, "id", "name", "email", "phone", "role")
    return body


def delete_body(body: DeleteUserRequest) -> DeleteUserRequest:
    require_fields(body, "id", message="User ID is required")
    return body
