"""Session authority: JWT issue/verify/refresh, logout cookies and credential checks."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from garagelog.config import Settings, get_settings
from garagelog.errors import Unauthenticated, Unauthorized
from garagelog.models.user import User
from garagelog.repositories.users import UserRepository

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class Claims(BaseModel):
    """Identity and privilege carried by a token."""

    user_id: int
    username: str
    is_admin: bool
    expires_at: datetime


@dataclass(frozen=True)
class SessionCookie:
    """Cookie envelope handed to the HTTP layer unchanged."""

    name: str
    value: str
    expires: datetime
    domain: str | None = None
    path: str = "/"
    http_only: bool = True
    same_site: str = "none"
    secure: bool = False


@dataclass(frozen=True)
class IssuedToken:
    token: str
    claims: Claims
    cookie: SessionCookie


class SessionAuthority:
    """Issues and checks bearer tokens.

    Tokens are self-contained: there is no server-side session store, so a
    token stays valid until it expires even after logout clears the cookie.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.ttl = timedelta(minutes=settings.jwt_expiration_minutes)
        self.refresh_window = timedelta(minutes=settings.jwt_refresh_window_minutes)
        self.cookie_name = settings.cookie_name
        self.cookie_domain = settings.cookie_domain
        self.cookie_secure = settings.cookie_secure
        self.cookie_samesite = settings.cookie_samesite
        self.allow_passwordless = settings.allow_passwordless_login

    def issue(
        self,
        user_id: int,
        username: str,
        is_admin: bool,
        expires_at: datetime | None = None,
    ) -> IssuedToken:
        """Sign a token for a verified identity."""
        if expires_at is None:
            expires_at = datetime.now(UTC) + self.ttl
        # JWT exp has whole-second resolution
        expires_at = expires_at.astimezone(UTC).replace(microsecond=0)
        to_encode = {
            "sub": str(user_id),
            "username": username,
            "is_admin": is_admin,
            "exp": expires_at,
        }
        token = jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
        claims = Claims(
            user_id=user_id, username=username, is_admin=is_admin, expires_at=expires_at
        )
        return IssuedToken(token=token, claims=claims, cookie=self._cookie(token, expires_at))

    def verify(self, token: str) -> Claims:
        """Check signature and expiry, and decode the claims."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise Unauthenticated(f"Invalid token: {e}") from e

        try:
            return Claims(
                user_id=int(payload["sub"]),
                username=payload["username"],
                is_admin=payload["is_admin"],
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise Unauthenticated("Malformed token claims") from e

    def refresh(self, token: str, force: bool = False) -> IssuedToken | None:
        """Re-issue a valid token with a fresh expiry.

        Returns None when not forced and the token is not yet inside the
        refresh window. A forced refresh always moves the expiry later.
        """
        claims = self.verify(token)
        now = datetime.now(UTC)
        if not force and claims.expires_at - now > self.refresh_window:
            return None
        expires_at = max(now + self.ttl, claims.expires_at + timedelta(seconds=1))
        logger.info(f"Refreshing token for user {claims.username}")
        return self.issue(claims.user_id, claims.username, claims.is_admin, expires_at)

    def revoke(self) -> SessionCookie:
        """Cookie that overwrites the session cookie with an already-expired one."""
        return self._cookie("", datetime.fromtimestamp(0, UTC))

    def check_credentials(self, db: Session, username: str, password: str) -> User:
        """Authenticate a username/password pair.

        Raises NotFound for an unknown username and Unauthorized for a wrong
        password. Users with no stored hash are let in on username alone when
        passwordless login is enabled.
        """
        user = UserRepository(db).get_by_username(username)
        if not user.has_password:
            if not self.allow_passwordless:
                raise Unauthorized("Password login required")
            logger.warning(f"User {username} has no password; authenticated by username only")
        elif not verify_password(password, user.password_hash):
            raise Unauthorized("Incorrect username or password")
        return user

    def _cookie(self, value: str, expires: datetime) -> SessionCookie:
        return SessionCookie(
            name=self.cookie_name,
            value=value,
            expires=expires,
            domain=self.cookie_domain,
            same_site=self.cookie_samesite,
            secure=self.cookie_secure,
        )


@lru_cache
def get_session_authority() -> SessionAuthority:
    """Process-wide session authority built from settings."""
    return SessionAuthority(get_settings())
