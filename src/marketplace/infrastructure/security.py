"""Credential handling: JWT bearer tokens and password hashing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from marketplace.application.ports import Identity, PasswordHasher, TokenService
from marketplace.domain.exceptions import AuthenticationError
from marketplace.domain.model.user import Role, User


class PasslibPasswordHasher(PasswordHasher):

    def __init__(self) -> None:
        self._context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # Unrecognised hash format in stored data.
            return False


class JwtTokenService(TokenService):

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)

    def issue(self, user: User) -> str:
        claims = {
            "sub": user.id,
            "role": user.role.value,
            "exp": datetime.now(timezone.utc) + self._expire,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def authenticate(self, credential: str | None) -> Identity:
        if not credential:
            raise AuthenticationError("Not authorized, no token")
        try:
            payload = jwt.decode(credential, self._secret, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationError("Not authorized, token failed") from None

        user_id = payload.get("sub")
        role = payload.get("role")
        if not user_id or role not in {r.value for r in Role}:
            raise AuthenticationError("Not authorized, token failed")
        return Identity(user_id=user_id, role=Role(role))
