"""Session tokens carried in the ``token`` cookie.

Tokens are JWTs whose identity is the user's email. Logging out only deletes
the cookie; a token copied elsewhere keeps working until it expires.
"""
from flask_jwt_extended import (
    JWTManager,
    create_access_token,
    get_jwt_identity,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from .errors import Unauthenticated
from .serializers import normalize_email


def init_tokens(app) -> JWTManager:
    return JWTManager(app)


def issue_token(email: str) -> str:
    return create_access_token(identity=normalize_email(email))


def verify_session() -> str:
    try:
        verify_jwt_in_request(locations=["cookies"])
    except (JWTExtendedException, PyJWTError):
        raise Unauthenticated("unauthorized access")

    email = normalize_email(get_jwt_identity())
    if not email:
        raise Unauthenticated("unauthorized access")
    return email


def attach_session(response, token: str):
    set_access_cookies(response, token)
    return response


def clear_session(response):
    unset_jwt_cookies(response)
    return response
