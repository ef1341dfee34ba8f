from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import or_
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.core.config import settings
from cinema_booking.core.security import create_access_token, get_password_hash, verify_password

from cinema_booking.models.user import User
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.user import UserCreate, AdminCreate, Token, User as UserSchema

router = APIRouter(prefix="/auth", tags=["auth"])


def _build_token_response(user: User) -> Token:
    access_token = create_access_token(
        subject=str(user.id),
        claims={"username": user.username, "email": user.email, "role": user.role},
    )
    return Token(
        access_token=access_token,
        token_type="bearer",
        user=UserSchema.model_validate(user),
    )


def _create_user(body: UserCreate, role: str, db: Session) -> User:
    taken = db.query(User).filter(
        or_(User.username == body.username, User.email == body.email)
    ).first()
    if taken:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered",
        )
    user = User(
        username=body.username,
        email=body.email,
        password_hash=get_password_hash(body.password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/register", response_model=ApiResponse[UserSchema], status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    user = _create_user(body, "user", db)
    return ApiResponse(message="Register successfully!", data=UserSchema.model_validate(user))


@router.post("/admin/register", response_model=ApiResponse[UserSchema], status_code=status.HTTP_201_CREATED)
def admin_register(body: AdminCreate, db: Session = Depends(get_db)):
    if body.admin_secret != settings.ADMIN_SECRET_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin secret",
        )
    user = _create_user(body, "admin", db)
    return ApiResponse(message="Admin registered successfully!", data=UserSchema.model_validate(user))


@router.post("/login", response_model=ApiResponse[Token])
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Log in with either the username or the email in the `username` field."""
    user = db.query(User).filter(
        or_(User.username == form_data.username, User.email == form_data.username)
    ).first()
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ApiResponse(message="Login successfully!", data=_build_token_response(user))
