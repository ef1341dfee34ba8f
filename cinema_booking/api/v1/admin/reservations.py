from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.api.deps import get_current_admin_user
from cinema_booking.models.user import User
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.reservation import Reservation as ReservationSchema
from cinema_booking.services.reservations import list_reservations

router = APIRouter(prefix="/reservations", tags=["Admin - Reservations"])


@router.get("", response_model=ApiResponse[List[ReservationSchema]])
def list_all_reservations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Return every reservation, across all users and showtimes."""
    reservations = list_reservations(db)
    return ApiResponse(
        message="Reservations fetched successfully.",
        data=[ReservationSchema.model_validate(r) for r in reservations],
    )
