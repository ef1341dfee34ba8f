from datetime import date, datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.models.showtime import Showtime
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.seat import AvailableSeat, ShowtimeSeat
from cinema_booking.schemas.showtime import Showtime as ShowtimeSchema
from cinema_booking.services.availability import list_available_seats
from cinema_booking.services.seat_catalog import list_seats_for_showtime

router = APIRouter(prefix="/showtimes", tags=["Showtimes"])


@router.get("/{movie_id}", response_model=ApiResponse[List[ShowtimeSchema]])
def get_movie_showtimes(
    movie_id: int,
    date: Optional[date] = Query(None, description="Screening date (YYYY-MM-DD), defaults to tomorrow"),
    db: Session = Depends(get_db),
):
    """
    Return the showtimes of a movie on one date.
    For today, only showtimes that have not started yet are returned.
    """
    # Use local time: date/start_time are stored as timezone-naive local values
    now = datetime.now()
    today = now.date()
    target = date or today + timedelta(days=1)

    if target < today:
        raise HTTPException(status_code=400, detail="No showtimes available for past dates.")

    query = db.query(Showtime).filter(Showtime.movie_id == movie_id, Showtime.date == target)
    if target == today:
        query = query.filter(Showtime.start_time > now.time())

    showtimes = query.order_by(Showtime.start_time).all()
    if not showtimes:
        raise HTTPException(status_code=404, detail="No showtimes available.")

    return ApiResponse(
        message="Showtimes fetched successfully.",
        data=[ShowtimeSchema.model_validate(s) for s in showtimes],
    )


@router.get("/{showtime_id}/seats", response_model=ApiResponse[List[ShowtimeSeat]])
def get_showtime_seats(showtime_id: int, db: Session = Depends(get_db)):
    """Full seat chart of the showtime's auditorium, with seat-type prices."""
    seats = list_seats_for_showtime(db, showtime_id)
    return ApiResponse(
        message="Seats with this showtime fetched successfully.",
        data=[ShowtimeSeat(**s._asdict()) for s in seats],
    )


@router.get("/{showtime_id}/available-seats", response_model=ApiResponse[List[AvailableSeat]])
def get_available_seats(showtime_id: int, db: Session = Depends(get_db)):
    """
    Seats not held by a pending or paid reservation.
    Does not require authentication; anyone can view availability.
    """
    seats = list_available_seats(db, showtime_id)
    return ApiResponse(
        message="Available seat with this showtime fetched successfully.",
        data=[AvailableSeat(**s._asdict()) for s in seats],
    )
