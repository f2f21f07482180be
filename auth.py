"""
Bearer-token authentication against Firebase Auth.

`authenticate` is the guard: it never raises and reports either the caller's
identity or why the request was refused. `current_user` is the FastAPI
dependency that turns a refusal into a 401/403 response.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Header, Request
from firebase_admin import auth as firebase_auth
from firebase_admin.exceptions import FirebaseError
from loguru import logger

from errors import AuthenticationInvalid, AuthenticationMissing

BEARER_PREFIX = "Bearer "

MISSING = "missing"
INVALID = "invalid"


class InvalidTokenError(Exception):
    """The identity provider rejected the token"""
    pass


@dataclass(frozen=True)
class Identity:
    uid: str
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthResult:
    identity: Optional[Identity] = None
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.identity is not None


class FirebaseTokenVerifier:
    def __init__(self, app=None):
        self._app = app

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            return firebase_auth.verify_id_token(token, app=self._app)
        except (ValueError, FirebaseError) as e:
            raise InvalidTokenError(str(e)) from e


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(BEARER_PREFIX)
    if len(parts) < 2:
        return None
    return parts[1] or None


def authenticate(authorization: Optional[str], verifier) -> AuthResult:
    token = extract_bearer_token(authorization)
    if token is None:
        return AuthResult(failure=MISSING)
    try:
        claims = verifier.verify(token)
    except InvalidTokenError as e:
        logger.info(f"Token rejected: {e}")
        return AuthResult(failure=INVALID)
    except Exception:
        # an unverifiable token is refused like a bad one
        logger.exception("Token verification failed")
        return AuthResult(failure=INVALID)
    uid = claims.get("uid") if claims else None
    if not uid:
        return AuthResult(failure=INVALID)
    return AuthResult(identity=Identity(uid=uid, claims=dict(claims)))


def current_user(request: Request, authorization: Optional[str] = Header(None)) -> Identity:
    verifier = request.app.state.collaborators.verifier
    result = authenticate(authorization, verifier)
    if result.failure == MISSING:
        raise AuthenticationMissing()
    if not result.ok:
        raise AuthenticationInvalid()
    return result.identity
