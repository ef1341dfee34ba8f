from typing import List, NamedTuple

from sqlalchemy import and_, exists
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import NotFoundError
from cinema_booking.models.auditorium import Row, Seat
from cinema_booking.models.reservation import ACTIVE_STATUSES, Reservation
from cinema_booking.models.showtime import Showtime


class AvailableSeat(NamedTuple):
    showtime_id: int
    seat_id: int
    row_name: str
    seat_number: str


def list_available_seats(db: Session, showtime_id: int) -> List[AvailableSeat]:
    """
    Return the seats of a showtime that nobody currently holds.

    A seat is taken while it has a pending or paid reservation for this
    showtime; a seat whose reservations are all cancelled is free again.

    Raises NotFoundError when the result is empty, with a message telling
    an unknown showtime apart from a fully booked one.
    """
    held = exists().where(
        and_(
            Reservation.showtime_id == Showtime.id,
            Reservation.seat_id == Seat.id,
            Reservation.payment_status.in_(ACTIVE_STATUSES),
        )
    )

    base = (
        db.query(Showtime.id, Seat.id, Row.name, Seat.seat_number)
        .join(Row, Row.auditorium_id == Showtime.auditorium_id)
        .join(Seat, Seat.row_id == Row.id)
        .filter(Showtime.id == showtime_id)
    )

    seats = base.filter(~held).order_by(Row.name, Seat.id).all()
    if seats:
        return [AvailableSeat(*s) for s in seats]

    if base.first() is None:
        raise NotFoundError("Showtime not found")
    raise NotFoundError("No available seat with this showtime")
