from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from cinema_booking.core.config import settings
from cinema_booking.core.security import decode_token
from cinema_booking.db.session import get_db
from cinema_booking.models.user import User
from cinema_booking.services.payments import PaymentOutcome, random_outcome

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    subject = decode_token(token)
    if subject is None or not subject.isdigit():
        raise credentials_exception
    user = db.get(User, int(subject))
    if user is None:
        raise credentials_exception
    return user


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


def ensure_owner_or_admin(owner_id: int, current_user: User) -> None:
    """Raise 403 unless the resource belongs to the caller or the caller is an admin."""
    if owner_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access another user's resources",
        )


def get_payment_outcome() -> PaymentOutcome:
    return random_outcome(settings.PAYMENT_SUCCESS_RATE)
