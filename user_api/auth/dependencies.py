import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from user_api.auth import jwt_handler
from user_api.auth.jwt_handler import TokenClaims
from user_api.core.config import Settings
from user_api.core.errors import AuthenticationError, InvalidTokenError
from user_api.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    if credentials is None:
        raise AuthenticationError("Access denied")

    try:
        claims = jwt_handler.decode_access_token(settings, credentials.credentials)
    except InvalidTokenError:
        logger.info("Rejected bearer token on %s %s", request.method, request.url.path)
        raise

    request.state.user = claims
    return claims
