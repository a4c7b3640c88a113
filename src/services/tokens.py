"""Issue and verify signed, time-limited bearer tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidTokenError(TokenError):
    """Token is malformed, has a bad signature, or lacks required claims."""


class ExpiredTokenError(TokenError):
    """Token was valid but is past its expiry."""


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: str
    username: str
    expires_at: datetime


class TokenService:
    """JWT issuer/verifier bound to one signing secret.

    Built once at startup. Rotating the secret invalidates every outstanding
    token; there is no revocation list, so expiry is the only other way a
    token stops working.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int = 10080):
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expiration_minutes)

    def issue(self, user_id: str, username: str, now: datetime | None = None) -> str:
        """Create a signed token for ``user_id`` that expires after the configured lifetime."""
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token.

        Raises:
            ExpiredTokenError: the signature is good but ``exp`` has passed.
            InvalidTokenError: anything else is wrong with the token.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError("Invalid authentication token") from e

        user_id = payload.get("sub")
        username = payload.get("username")
        exp = payload.get("exp")
        if not user_id or not username or exp is None:
            raise InvalidTokenError("Token is missing required claims")

        return TokenClaims(
            user_id=user_id,
            username=username,
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
        )
