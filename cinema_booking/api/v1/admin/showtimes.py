from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.api.deps import get_current_admin_user
from cinema_booking.models.user import User
from cinema_booking.models.auditorium import Auditorium
from cinema_booking.models.movie import Movie
from cinema_booking.models.reservation import ACTIVE_STATUSES, Reservation
from cinema_booking.models.showtime import Showtime
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.showtime import Showtime as ShowtimeSchema, ShowtimeCreate

router = APIRouter(prefix="/showtimes", tags=["Admin - Showtimes"])

DUPLICATE_SLOT = "Movie showtimes with this date and start time already exists!"


def _slot_taken(db: Session, data: ShowtimeCreate) -> bool:
    return db.query(Showtime.id).filter(
        Showtime.movie_id == data.movie_id,
        Showtime.date == data.date,
        Showtime.start_time == data.start_time,
    ).first() is not None


@router.post("", response_model=ApiResponse[ShowtimeSchema], status_code=status.HTTP_201_CREATED)
def create_showtime(
    data: ShowtimeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    if not db.get(Movie, data.movie_id):
        raise HTTPException(status_code=404, detail="No movie found.")
    if not db.get(Auditorium, data.auditorium_id):
        raise HTTPException(status_code=404, detail="No auditorium found.")

    if _slot_taken(db, data):
        raise HTTPException(status_code=400, detail=DUPLICATE_SLOT)

    showtime = Showtime(**data.model_dump())
    db.add(showtime)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if _slot_taken(db, data):
            raise HTTPException(status_code=400, detail=DUPLICATE_SLOT)
        raise
    db.refresh(showtime)
    return ApiResponse(message="Showtimes created successfully.", data=ShowtimeSchema.model_validate(showtime))


@router.delete("/{showtime_id}", response_model=ApiResponse[ShowtimeSchema])
def delete_showtime(
    showtime_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    showtime = db.get(Showtime, showtime_id)
    if not showtime:
        raise HTTPException(status_code=404, detail="No showtime found.")

    has_active = db.query(Reservation.id).filter(
        Reservation.showtime_id == showtime_id,
        Reservation.payment_status.in_(ACTIVE_STATUSES),
    ).first()
    if has_active:
        raise HTTPException(status_code=400, detail="Showtime has active reservations.")

    deleted = ShowtimeSchema.model_validate(showtime)
    db.delete(showtime)
    db.commit()
    return ApiResponse(message="Showtime deleted successfully.", data=deleted)
