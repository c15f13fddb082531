import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from user_api.auth import jwt_handler, passwords
from user_api.auth.dependencies import get_settings, get_user_repository
from user_api.core.config import Settings
from user_api.core.errors import (
    AuthenticationError,
    DuplicateEmailError,
    InfrastructureError,
    UserNotFoundError,
)
from user_api.repositories.user_repository import UserRepository
from user_api.schemas.user import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    login_body,
    register_body,
)

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


@router.post('/register', status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def register(
    body: RegisterRequest = Depends(register_body),
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        if await users.exists_by_email(body.email) > 0:
            raise DuplicateEmailError('User already exists')

        hashed_password = await run_in_threadpool(
            passwords.hash_password, body.password, settings.bcrypt_rounds
        )
        user_id = await users.insert(body.name, body.email, body.phone, hashed_password, body.role)
    except (SQLAlchemyError, ValueError) as exc:
        logger.exception('Error registering user')
        raise InfrastructureError() from exc

    logger.info('Registered user id=%s', user_id)
    return UserResponse(id=user_id, name=body.name, email=body.email, phone=body.phone, role=body.role)


@router.post('/login', response_model=TokenResponse)
async def login(
    body: LoginRequest = Depends(login_body),
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        user = await users.find_by_email(body.email)
    except SQLAlchemyError as exc:
        logger.exception('Error logging in')
        raise InfrastructureError() from exc

    if user is None:
        raise UserNotFoundError('User not found')

    valid_password = await run_in_threadpool(passwords.verify_password, body.password, user['password'])
    if not valid_password:
        logger.info('Rejected login for user id=%s: password mismatch', user['id'])
        raise AuthenticationError('Invalid password')

    token = jwt_handler.create_access_token(
        settings,
        user_id=user['id'],
        email=user['email'],
        role=user['role'],
    )
    return TokenResponse(token=token)


@router.post('/logout', response_class=PlainTextResponse)
def logout():
    # Tokens are stateless; the client discards its copy.
    return 'Logged out successfully'
