from decimal import Decimal
from typing import List, NamedTuple, Optional

from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import NotFoundError
from cinema_booking.models.auditorium import Row, Seat, SeatType
from cinema_booking.models.reservation import Reservation
from cinema_booking.models.showtime import Showtime


class SeatListing(NamedTuple):
    seat_id: int
    row_name: str
    seat_number: str
    seat_type: str
    seat_type_price: Decimal


def _showtime_seats_query(db: Session, showtime_id: int):
    """Seats reachable from a showtime: Showtime → Auditorium → Rows → Seats."""
    return (
        db.query(Seat)
        .join(Row, Row.id == Seat.row_id)
        .join(Showtime, Showtime.auditorium_id == Row.auditorium_id)
        .filter(Showtime.id == showtime_id)
    )


def list_seats_for_showtime(db: Session, showtime_id: int) -> List[SeatListing]:
    """
    Return every seat of the showtime's auditorium with its seat-type price.

    Raises NotFoundError when the showtime resolves to no seats (unknown
    showtime, or an auditorium without a configured seating chart).
    """
    rows = (
        _showtime_seats_query(db, showtime_id)
        .join(SeatType, SeatType.id == Row.seat_type_id)
        .with_entities(Seat.id, Row.name, Seat.seat_number, SeatType.name, SeatType.price)
        .order_by(Row.name, Seat.id)
        .all()
    )
    if not rows:
        raise NotFoundError("Showtime not found")
    return [SeatListing(*r) for r in rows]


def get_seat_for_showtime(db: Session, seat_id: int, showtime_id: int) -> Optional[Seat]:
    """Return the seat only if it belongs to the showtime's auditorium."""
    return _showtime_seats_query(db, showtime_id).filter(Seat.id == seat_id).first()


def get_reservation_price(db: Session, reservation_id: int) -> Optional[Decimal]:
    """Seat-type price of the seat a reservation holds (reservation → seat → row → seat_type)."""
    return (
        db.query(SeatType.price)
        .join(Row, Row.seat_type_id == SeatType.id)
        .join(Seat, Seat.row_id == Row.id)
        .join(Reservation, Reservation.seat_id == Seat.id)
        .filter(Reservation.id == reservation_id)
        .scalar()
    )
