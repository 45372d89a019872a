"""Security helpers for hashing, token generation and webhook signing."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import hmac

from jose import JWTError, jwt
from passlib.context import CryptContext

from sjfulfillment.config import get_settings

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(hashed_password: str, is_active: bool) -> str:
    """Fingerprint embedded in tokens so a password change revokes them."""

    return sha256(f"{hashed_password}:{int(is_active)}".encode()).hexdigest()


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


# ---- Webhook signatures ----


def sign_webhook_payload(body: bytes, secret: str) -> str:
    """Return the hex HMAC-SHA256 of ``body`` keyed with ``secret``."""

    return hmac.new(secret.encode(), body, sha256).hexdigest()


def verify_webhook_signature(body: bytes, signature: str, secret: str) -> bool:
    """Check ``signature`` against ``body`` in constant time."""

    expected = sign_webhook_payload(body, secret)
    return hmac.compare_digest(expected, signature or "")
