from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.api.deps import ensure_owner_or_admin, get_current_user
from cinema_booking.models.user import User
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.reservation import Reservation as ReservationSchema, ReservationCreate
from cinema_booking.services import reservations as ledger

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("", response_model=ApiResponse[ReservationSchema], status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Hold a seat for a showtime. The reservation starts out `pending`
    and becomes `paid` once a payment for it completes.
    """
    user_id = data.user_id or current_user.id
    ensure_owner_or_admin(user_id, current_user)

    reservation = ledger.create_reservation(db, user_id, data.seat_id, data.showtime_id)
    return ApiResponse(
        message="Reservation created successfully.",
        data=ReservationSchema.model_validate(reservation),
    )


@router.put("/{reservation_id}/cancel", response_model=ApiResponse[ReservationSchema])
def cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Cancel a pending or paid reservation.
    - Releases the seat for the showtime.
    - Removes the reservation's payments.
    """
    reservation = ledger.get_reservation(db, reservation_id)
    ensure_owner_or_admin(reservation.user_id, current_user)

    reservation = ledger.cancel_reservation(db, reservation_id)
    return ApiResponse(
        message="Reservation cancelled successfully.",
        data=ReservationSchema.model_validate(reservation),
    )


@router.get("/{user_id}", response_model=ApiResponse[List[ReservationSchema]])
def get_user_reservations(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_owner_or_admin(user_id, current_user)

    reservations = ledger.list_reservations_by_user(db, user_id)
    return ApiResponse(
        message="Reservations fetched successfully.",
        data=[ReservationSchema.model_validate(r) for r in reservations],
    )
