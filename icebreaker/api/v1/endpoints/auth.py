# icebreaker/api/v1/endpoints/auth.py
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from icebreaker.core.config import settings
from icebreaker.core.security import (
    authenticate_admin,
    create_access_token,
    get_current_admin,
)
from icebreaker.db.session import get_db
from icebreaker.models.admin import Admin
from icebreaker.schemas.auth import AdminPublic, LoginRequest, Token

router = APIRouter()


def _issue_token(admin: Admin) -> Token:
    access_token_expires = timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    access_token = create_access_token(
        data={"sub": admin.username},
        expires_delta=access_token_expires,
    )
    return Token(access_token=access_token)


# JSON body login for the admin dashboard
@router.post("/login", response_model=Token)
def login_for_access_token(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    admin = authenticate_admin(db, payload.username, payload.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(admin)


# OAuth2 form login, used by the "Authorize" button in /docs
@router.post("/token", response_model=Token)
def login_for_access_token_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    admin = authenticate_admin(db, form_data.username, form_data.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(admin)


@router.get("/me", response_model=AdminPublic)
def read_me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
