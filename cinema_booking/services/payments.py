import logging
import random
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.core.exceptions import ConflictError, NotFoundError
from cinema_booking.models.payment import OPEN_STATUSES, Payment, PaymentStatus
from cinema_booking.models.reservation import Reservation, ReservationStatus
from cinema_booking.services.seat_catalog import get_reservation_price

logger = logging.getLogger(__name__)

# Decides whether a settlement attempt succeeds
PaymentOutcome = Callable[[], bool]

OPEN_PAYMENT_EXISTS = "Reservation already has an open payment"


def random_outcome(success_rate: float = 0.8) -> PaymentOutcome:
    """Bernoulli(success_rate) settlement: stands in for a real payment gateway."""
    def decide() -> bool:
        return random.random() < success_rate
    return decide


def create_payment(db: Session, reservation_id: int, payment_method: str) -> Payment:
    """
    Open a payment for a pending reservation.

    The amount is the seat-type price of the reserved seat at this moment;
    later price changes do not affect the payment.
    """
    reservation = db.get(Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")
    if reservation.payment_status != ReservationStatus.pending:
        raise ConflictError("Reservation paid or cancelled")

    open_payment = (
        db.query(Payment.id)
        .filter(Payment.reservation_id == reservation_id, Payment.status.in_(OPEN_STATUSES))
        .first()
    )
    if open_payment is not None:
        raise ConflictError(OPEN_PAYMENT_EXISTS)

    payment = Payment(
        reservation_id=reservation.id,
        user_id=reservation.user_id,
        amount=get_reservation_price(db, reservation_id),
        payment_method=payment_method,
        status=PaymentStatus.pending,
    )
    db.add(payment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent payment creation for reservation %s rejected", reservation_id)
        raise ConflictError(OPEN_PAYMENT_EXISTS)

    db.refresh(payment)
    logger.info(
        "Payment %s created for reservation %s: amount=%s method=%s",
        payment.id, reservation_id, payment.amount, payment_method,
    )
    return payment


def process_payment(db: Session, payment_id: int, decide: PaymentOutcome) -> Payment:
    """
    Settle a pending payment.

    Both transitions are conditional updates in one transaction:

    - payment   pending → completed | failed
    - reservation pending → paid      (only when the payment completed)

    If another request settled the payment, or cancelled the reservation,
    in the meantime, nothing is written and ConflictError is raised. A failed
    settlement leaves the reservation pending so a new payment can be opened.
    """
    payment = db.get(Payment, payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if payment.status != PaymentStatus.pending:
        raise ConflictError(f"Payment already {payment.status.value}")

    reservation_id = payment.reservation_id
    succeeded = decide()
    new_status = PaymentStatus.completed if succeeded else PaymentStatus.failed

    updated = (
        db.query(Payment)
        .filter(Payment.id == payment_id, Payment.status == PaymentStatus.pending)
        .update({Payment.status: new_status}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise ConflictError("Payment already processed")

    if succeeded:
        claimed = (
            db.query(Reservation)
            .filter(
                Reservation.id == reservation_id,
                Reservation.payment_status == ReservationStatus.pending,
            )
            .update({Reservation.payment_status: ReservationStatus.paid}, synchronize_session=False)
        )
        if not claimed:
            db.rollback()
            logger.warning(
                "Payment %s not settled: reservation %s is no longer pending",
                payment_id, reservation_id,
            )
            raise ConflictError("Reservation is no longer pending")

    db.commit()
    db.refresh(payment)
    logger.info("Payment %s processed: %s", payment_id, new_status.value)
    return payment


def get_payment(db: Session, payment_id: int) -> Payment:
    """Current state of a payment; never changes anything."""
    payment = db.get(Payment, payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment
