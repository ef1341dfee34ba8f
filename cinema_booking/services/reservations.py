import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import ConflictError, NotFoundError
from cinema_booking.models.payment import Payment
from cinema_booking.models.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from cinema_booking.models.user import User
from cinema_booking.services.seat_catalog import get_seat_for_showtime

logger = logging.getLogger(__name__)

SEAT_TAKEN = "Seat with this showtime is not available"


def _find_active_reservation(db: Session, seat_id: int, showtime_id: int) -> Optional[Reservation]:
    return (
        db.query(Reservation)
        .filter(
            Reservation.seat_id == seat_id,
            Reservation.showtime_id == showtime_id,
            Reservation.payment_status.in_(ACTIVE_STATUSES),
        )
        .first()
    )


def create_reservation(db: Session, user_id: int, seat_id: int, showtime_id: int) -> Reservation:
    """
    Hold a seat for a showtime on behalf of a user.

    The exclusivity pre-check gives a clean error in the common case; the
    partial unique index on active (seat_id, showtime_id) pairs decides the
    race when two requests pass the pre-check together.
    """
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")

    if get_seat_for_showtime(db, seat_id, showtime_id) is None:
        raise NotFoundError("Seat id not found for this showtime")

    if _find_active_reservation(db, seat_id, showtime_id) is not None:
        raise ConflictError(SEAT_TAKEN)

    reservation = Reservation(
        user_id=user_id,
        seat_id=seat_id,
        showtime_id=showtime_id,
        payment_status=ReservationStatus.pending,
    )
    db.add(reservation)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Lost booking race for seat %s at showtime %s (user %s)",
            seat_id, showtime_id, user_id,
        )
        raise ConflictError(SEAT_TAKEN)

    db.refresh(reservation)
    logger.info(
        "Reservation %s created: user=%s seat=%s showtime=%s",
        reservation.id, user_id, seat_id, showtime_id,
    )
    return reservation


def get_reservation(db: Session, reservation_id: int) -> Reservation:
    reservation = db.get(Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")
    return reservation


def cancel_reservation(db: Session, reservation_id: int) -> Reservation:
    """
    Release the seat held by a pending or paid reservation.

    Payments of the reservation are deleted along with the cancellation.
    An already-cancelled reservation is reported as not found.
    """
    reservation = (
        db.query(Reservation)
        .filter(
            Reservation.id == reservation_id,
            Reservation.payment_status.in_(ACTIVE_STATUSES),
        )
        .with_for_update()
        .first()
    )
    if reservation is None:
        raise NotFoundError("Reservation not found or already cancelled")

    reservation.payment_status = ReservationStatus.cancelled
    deleted = (
        db.query(Payment)
        .filter(Payment.reservation_id == reservation_id)
        .delete(synchronize_session="fetch")
    )
    db.commit()
    db.refresh(reservation)

    logger.info("Reservation %s cancelled (%d payment(s) removed)", reservation_id, deleted)
    return reservation


def list_reservations_by_user(db: Session, user_id: int) -> List[Reservation]:
    reservations = (
        db.query(Reservation)
        .filter(Reservation.user_id == user_id)
        .order_by(Reservation.id)
        .all()
    )
    if not reservations:
        raise NotFoundError("Reservations not found with this user id")
    return reservations


def list_reservations(db: Session) -> List[Reservation]:
    """Administrative listing: every reservation, no filtering."""
    return db.query(Reservation).order_by(Reservation.id).all()
