"""
Firebase Authentication

Resolves the caller of an admin endpoint from a Firebase ID token, or from
the X-Demo-User-Id header when demo mode is enabled.
"""

import os
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth

from churchadmin.core.logging import get_logger

logger = get_logger("churchadmin.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def demo_mode_enabled(environment: Optional[str] = None, flag: Optional[str] = None) -> bool:
    """DEMO_MODE defaults to on, except in production where it must be set explicitly."""
    environment = environment if environment is not None else os.environ.get("ENVIRONMENT", "development")
    if flag is None:
        flag = os.environ.get("DEMO_MODE")
    if flag is None:
        return environment != "production"
    return flag.lower() == "true"


DEMO_MODE_ENABLED = demo_mode_enabled()
DEMO_USER_PREFIX = "demo_"
DEMO_EMAIL_DOMAIN = "demo.churchadmin.local"


@dataclass
class FirebaseUser:
    """The authenticated operator of an admin request."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    is_demo: bool = False

    @classmethod
    def from_claims(cls, claims: dict) -> "FirebaseUser":
        return cls(uid=claims["uid"], email=claims.get("email"), name=claims.get("name"))

    @classmethod
    def demo(cls, session_id: str) -> "FirebaseUser":
        return cls(
            uid=f"{DEMO_USER_PREFIX}{session_id}",
            email=f"{session_id}@{DEMO_EMAIL_DOMAIN}",
            name=f"Demo Operator ({session_id})",
            is_demo=True,
        )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _verify_id_token(token: str) -> dict:
    """Verify a Firebase ID token, initializing the Admin SDK on first use."""
    if not firebase_admin._apps:
        firebase_admin.initialize_app()

    try:
        return auth.verify_id_token(token)
    except auth.ExpiredIdTokenError:
        raise _unauthorized("Authentication token has expired")
    except auth.InvalidIdTokenError:
        raise _unauthorized("Invalid authentication token")
    except Exception as e:
        logger.warning(f"Token verification failed: {e}")
        raise _unauthorized(f"Authentication failed: {e}")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    x_demo_user_id: Optional[str] = Header(None, alias="X-Demo-User-Id"),
) -> FirebaseUser:
    """
    Dependency returning the authenticated user of the request.

    Demo mode:
        Send header: X-Demo-User-Id: my-session
        Returns a demo user with uid: demo_my-session
    """
    if DEMO_MODE_ENABLED and x_demo_user_id:
        return FirebaseUser.demo(x_demo_user_id)

    if credentials is None:
        raise _unauthorized("Missing authentication token")

    return FirebaseUser.from_claims(_verify_id_token(credentials.credentials))
