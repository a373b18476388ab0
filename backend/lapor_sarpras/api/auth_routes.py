# backend/lapor_sarpras/api/auth_routes.py

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from lapor_sarpras.api.deps import get_db, get_current_user
from lapor_sarpras.api.schemas import (
    ApiResponse,
    CreatedId,
    LoginIn,
    LoginOut,
    RegisterIn,
    TokenOut,
    UserOut,
)
from lapor_sarpras.core.exceptions import NotFound
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.models.user import User
from lapor_sarpras.services.users import authenticate, register_user, revoke_token

router = APIRouter()


@router.post("/register", response_model=ApiResponse[CreatedId], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user = register_user(
        db,
        username=payload.username,
        password=payload.password,
        nama=payload.nama,
        email=payload.email,
        role=payload.role,
    )
    return ApiResponse(data=CreatedId(id=user.id), message="User registered successfully")


# JSON login used by the frontend
@router.post("/login", response_model=ApiResponse[LoginOut])
def login(payload: LoginIn, db: Session = Depends(get_db)):
    token, user = authenticate(
        db,
        username=payload.username,
        password=payload.password,
        role=payload.role,
    )
    return ApiResponse(
        data=LoginOut(token=token, user=UserOut.model_validate(user)),
        message="Login successful",
    )


# OAuth2 form endpoint (Swagger Authorize uses this)
@router.post("/token", response_model=TokenOut)
def token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    access_token, _user = authenticate(
        db,
        username=form_data.username or "",
        password=form_data.password or "",
    )
    return TokenOut(access_token=access_token)


@router.get("/me", response_model=ApiResponse[UserOut])
def me(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    user = db.get(User, current_user.id)
    if not user:
        raise NotFound("User not found")
    return ApiResponse(data=UserOut.model_validate(user))


@router.post("/logout", response_model=ApiResponse[None])
def logout(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    revoke_token(db, jti=current_user.jti, exp=current_user.exp)
    return ApiResponse(message="Logged out")
