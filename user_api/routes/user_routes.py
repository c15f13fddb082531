import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from user_api.auth.dependencies import get_current_claims, get_user_repository
from user_api.auth.jwt_handler import TokenClaims
from user_api.core.errors import InfrastructureError
from user_api.repositories.user_repository import UserRepository
from user_api.schemas.user import (
    CreateUserRequest,
    DeleteUserRequest,
    UpdateUserRequest,
    UserResponse,
    create_body,
    delete_body,
    update_body,
)

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


@router.get('/', response_model=list[UserResponse])
async def list_users(
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        return await users.list_all()
    except SQLAlchemyError as exc:
        logger.exception('Error fetching users')
        raise InfrastructureError() from exc


@router.post('/', status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    body: CreateUserRequest = Depends(create_body),
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        # Accounts made here have no password until one is set out of band.
        user_id = await users.insert(body.name, body.email, body.phone, None, body.role)
    except SQLAlchemyError as exc:
        logger.exception('Error creating user')
        raise InfrastructureError() from exc

    logger.info('User id=%s created by user id=%s', user_id, claims.id)
    return UserResponse(id=user_id, name=body.name, email=body.email, phone=body.phone, role=body.role)


@router.put('/', response_model=UserResponse)
async def update_user(
    body: UpdateUserRequest = Depends(update_body),
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        affected = await users.update_by_id(body.id, body.name, body.email, body.phone, body.role)
    except SQLAlchemyError as exc:
        logger.exception('Error updating user')
        raise InfrastructureError() from exc

    # An unknown id still reports success.
    logger.info('User id=%s updated by user id=%s (rows affected: %s)', body.id, claims.id, affected)
    return UserResponse(id=body.id, name=body.name, email=body.email, phone=body.phone, role=body.role)


@router.delete('/', response_class=PlainTextResponse)
async def delete_user(
    body: DeleteUserRequest = Depends(delete_body),
    claims: TokenClaims = Depends(get_current_claims),
    users: UserRepository = Depends(get_user_repository),
):
    try:
        await users.delete_by_id(body.id)
    except SQLAlchemyError as exc:
        logger.exception('Error deleting user')
        raise InfrastructureError() from exc

    logger.info('User id=%s deleted by user id=%s', body.id, claims.id)
    return f'User with ID {body.id} deleted successfully'
