"""Cognito bearer-token authentication.

Tokens are RS256 JWTs issued by the configured Cognito user pool. The
verified username is the identity every list operation is scoped to.
"""

import logging
from typing import Any, Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from app.config import Settings
from app.constants import ErrorMessages

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class JwtPayload(BaseModel):
    username: str
    sub: str
    email: str = ""


class InvalidTokenError(Exception):
    """Token is malformed, expired, or not issued for this client."""


class KeySetError(Exception):
    """The user pool's signing keys could not be fetched."""


class CognitoTokenVerifier:
    def __init__(self, settings: Settings, jwks_client: Optional[Any] = None):
        self.issuer = settings.cognito_issuer
        self.client_id = settings.cognito_client_id
        self.jwks_client = jwks_client or jwt.PyJWKClient(settings.cognito_jwks_url)

    def verify(self, token: str) -> JwtPayload:
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
        except jwt.PyJWKClientConnectionError as e:
            raise KeySetError(str(e)) from e
        except (jwt.PyJWKClientError, jwt.DecodeError) as e:
            raise InvalidTokenError(f"Invalid token header: {e}") from e

        try:
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                issuer=self.issuer,
                # id tokens carry `aud`, access tokens `client_id`; checked below
                options={"verify_aud": False, "require": ["exp", "iss", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired. Please sign in again.") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Token validation failed: {e}") from e

        audience = claims.get("client_id") if claims.get("token_use") == "access" else claims.get("aud")
        if self.client_id and audience != self.client_id:
            raise InvalidTokenError("Token audience mismatch.")

        username = claims.get("username") or claims.get("cognito:username")
        if not username:
            raise InvalidTokenError("Token missing username claim")
        return JwtPayload(username=username, sub=claims["sub"], email=claims.get("email", ""))


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> JwtPayload:
    # sync on purpose: PyJWKClient fetches keys with blocking I/O
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=ErrorMessages.UNAUTHORIZED
        )
    verifier: CognitoTokenVerifier = request.app.state.token_verifier
    try:
        return verifier.verify(credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except KeySetError as e:
        logger.error(f"Failed to fetch Cognito JWKS: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication service error",
        ) from e
