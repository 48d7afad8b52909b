# papernotes/shared/auth.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError  # python-jose[cryptography]

from papernotes.shared.config import settings

bearer = HTTPBearer(auto_error=False, scheme_name="bearerAuth")

def create_access_token(
    sub: str,
    email: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    minutes: Optional[int] = None,
) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=minutes or settings.JWT_EXPIRE_MIN)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if email:
        payload["email"] = email
    if settings.JWT_ISS:
        payload["iss"] = settings.JWT_ISS
    if settings.JWT_AUD:
        payload["aud"] = settings.JWT_AUD
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.JWT_KEY, algorithm=settings.JWT_ALG)

def resolve_token(token: str) -> Dict[str, Any]:
    """Map a bearer token to the caller, raising 401 when it is not valid."""
    # Demo shortcut (strict: must match DEMO_TOKEN exactly)
    if settings.AUTH_DEMO and token == settings.DEMO_TOKEN:
        return {"sub": "demo-user", "email": None, "mode": "demo"}

    try:
        payload = jwt.decode(
            token,
            settings.JWT_KEY,
            algorithms=[settings.JWT_ALG],
            audience=settings.JWT_AUD,
            issuer=settings.JWT_ISS,
            options={
                "verify_aud": bool(settings.JWT_AUD),
                "verify_iss": bool(settings.JWT_ISS),
            },
        )
    except JWTError as e:
        raise HTTPException(401, f"invalid token: {e}")

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(401, "invalid token: missing sub")

    return {"sub": sub, "email": payload.get("email"), "mode": "jwt"}

def get_user(creds: HTTPAuthorizationCredentials = Depends(bearer)):
    # Every note read or write goes through here
    if not creds:
        raise HTTPException(401, "missing bearer token")
    return resolve_token(creds.credentials)
