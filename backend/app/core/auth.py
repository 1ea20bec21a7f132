from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt
from fastapi import HTTPException, Request

from app.core.config import settings

TOKEN_ALGORITHM = "HS256"
ACTOR_HEADER = "X-Actor-Id"


def hash_password(password: str) -> str:
    """Hash a customer password with bcrypt for storage."""
    salt = bcrypt.gensalt(rounds=settings.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_customer_token(customer_id: UUID) -> str:
    """Issue a signed session token for a storefront customer."""
    now = datetime.now(UTC)
    payload = {
        "sub": str(customer_id),
        "iat": now,
        "exp": now + timedelta(hours=settings.CUSTOMER_TOKEN_TTL_HOURS),
    }
    return jwt.encode(payload, settings.CUSTOMER_TOKEN_SECRET, algorithm=TOKEN_ALGORITHM)


def verify_customer_token(token: str) -> UUID:
    """Return the customer id carried by a token.

    Raises jwt.InvalidTokenError (or a subclass) for bad or expired tokens,
    ValueError/KeyError for malformed payloads.
    """
    payload = jwt.decode(token, settings.CUSTOMER_TOKEN_SECRET, algorithms=[TOKEN_ALGORITHM])
    return UUID(payload["sub"])


def get_optional_customer(request: Request) -> UUID | None:
    """Resolve the authenticated customer, or None for anonymous requests.

    Checkout decides what to do with anonymous callers, so a missing header
    is not an error here. A header that is present but invalid is.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = auth_header[7:]
    if not token:
        return None

    try:
        return verify_customer_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session token has expired") from None
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session token") from None


def get_current_customer(request: Request) -> UUID:
    """Require an authenticated customer."""
    customer_id = get_optional_customer(request)
    if customer_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return customer_id


def get_current_actor(request: Request) -> str:
    """Identity of the employee performing a back-office mutation.

    The store does not authenticate employees itself; it only records who acted.
    """
    actor_id = request.headers.get(ACTOR_HEADER, "").strip()
    if not actor_id:
        raise HTTPException(status_code=401, detail=f"{ACTOR_HEADER} header is required")
    return actor_id
