"""Bearer-token identity extraction.

Tokens are issued by the external identity provider and verified here with
the shared secret. The resulting ``Identity`` is passed explicitly into every
service call.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from resumehub.config import settings
from resumehub.schemas.auth import Identity

# auto_error=False: a missing token means "no identity", which each
# service call turns into UnauthenticatedError when it needs one.
security = HTTPBearer(auto_error=False)


def create_access_token(identity: Identity) -> str:
    """Mint a token with the provider's claim names (used by tests and local dev)."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": identity.id,
        "email": identity.email,
        "name": identity.display_name,
        "picture": identity.photo_url,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def identity_from_claims(payload: dict) -> Identity:
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")
    return Identity(
        id=user_id,
        email=payload.get("email") or "",
        display_name=payload.get("name") or "",
        photo_url=payload.get("picture") or "",
    )


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    if credentials is None:
        return None
    return identity_from_claims(decode_token(credentials.credentials))
