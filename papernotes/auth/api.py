# papernotes/auth/api.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm

from papernotes.shared.db import get_db
from papernotes.shared.auth import create_access_token, get_user
from papernotes.shared.config import settings
from papernotes.auth.service import register_user, authenticate_user, change_password

router = APIRouter(prefix="/auth", tags=["Auth"])

class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)

class PasswordIn(BaseModel):
    password: str = Field(min_length=6)

@router.post("/register", status_code=201)
def api_register(inb: RegisterIn, db: Session = Depends(get_db)):
    try:
        user = register_user(db, inb.email, inb.password)
        return {"ok": True, "user": user}
    except ValueError as e:
        raise HTTPException(400, str(e))

@router.post("/token")
def api_token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    if settings.AUTH_DEMO:
        # return the demo token; user pastes it in Authorize
        return {"access_token": settings.DEMO_TOKEN, "token_type": "bearer", "demo": True}
    user = authenticate_user(db, form.username, form.password)
    if not user:
        raise HTTPException(401, "invalid credentials")
    token = create_access_token(sub=user["sub"], email=user["email"])
    return {"access_token": token, "token_type": "bearer", "demo": False}

@router.get("/me")
def api_me(user = Depends(get_user)):
    return {"ok": True, "user": user}

@router.post("/password")
def api_password(inb: PasswordIn, user = Depends(get_user), db: Session = Depends(get_db)):
    try:
        out = change_password(db, user["sub"], inb.password)
    except LookupError:
        # demo users have no stored credentials
        raise HTTPException(400, "password change not available for this account")
    return {"ok": True, "user": out}
