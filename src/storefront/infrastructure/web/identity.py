"""Bearer-token identity for the web layer.

Tokens are HS256 JWTs whose payload carries ``CustomerID``, ``AccountID``
and ``exp``.  Issuing tokens belongs to the auth service; ``create_token``
exists for tests and local tooling.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import structlog
from fastapi import HTTPException, Request

from storefront.application.dto import Identity

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


def create_token(customer_id: str, account_id: str, secret: str, expires_in: int = 3600) -> str:
    payload = {
        "CustomerID": customer_id,
        "AccountID": account_id,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> dict | None:
    """Verify and decode the token.  Returns None if invalid or expired."""
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["exp"]})
    except jwt.PyJWTError as exc:
        logger.debug("token_rejected", reason=str(exc))
        return None


def resolve_identity(request: Request) -> Identity | None:
    """FastAPI dependency: the caller's identity, or None when anonymous.

    A token that is present but fails verification is rejected outright
    rather than treated as anonymous.
    """
    auth_header = request.headers.get("authorization")
    token = auth_header.split(" ")[1] if auth_header and " " in auth_header else None
    if not token:
        return None

    data = decode_token(token, request.app.state.settings.secret_key)
    if data is None or not data.get("CustomerID") or not data.get("AccountID"):
        logger.warning("invalid_token", path=request.url.path)
        raise HTTPException(status_code=403, detail="Invalid token")
    return Identity(customer_id=str(data["CustomerID"]), account_id=str(data["AccountID"]))
