from decimal import Decimal

import pytest

from cinema_booking.core.exceptions import ConflictError, NotFoundError
from cinema_booking.models import Payment, PaymentStatus, Reservation, ReservationStatus, SeatType
from cinema_booking.services import payments as processor
from cinema_booking.services import reservations as ledger


def succeed():
    return True


def fail():
    return False


@pytest.fixture()
def reservation(db, catalog):
    return ledger.create_reservation(db, catalog.alice, 5, 3)


def test_payment_amount_is_seat_type_price(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")

    assert payment.amount == Decimal("12.50")
    assert payment.user_id == reservation.user_id
    assert payment.payment_method == "credit_card"
    assert payment.status == PaymentStatus.pending


def test_payment_amount_is_copied_at_creation(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")
    db.query(SeatType).filter_by(name="standard").update({"price": Decimal("20.00")})
    db.commit()

    assert processor.get_payment(db, payment.id).amount == Decimal("12.50")


def test_premium_seat_price(db, catalog):
    reservation = ledger.create_reservation(db, catalog.bob, 7, 1)

    assert processor.create_payment(db, reservation.id, "paypal").amount == Decimal("18.00")


def test_create_payment_unknown_reservation(db, catalog):
    with pytest.raises(NotFoundError, match="Reservation not found"):
        processor.create_payment(db, 999, "credit_card")


def test_create_payment_for_cancelled_reservation(db, reservation):
    ledger.cancel_reservation(db, reservation.id)

    with pytest.raises(ConflictError, match="paid or cancelled"):
        processor.create_payment(db, reservation.id, "credit_card")


def test_create_payment_for_paid_reservation(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")
    processor.process_payment(db, payment.id, succeed)

    with pytest.raises(ConflictError, match="paid or cancelled"):
        processor.create_payment(db, reservation.id, "credit_card")


def test_only_one_open_payment_per_reservation(db, reservation):
    processor.create_payment(db, reservation.id, "credit_card")

    with pytest.raises(ConflictError, match="open payment"):
        processor.create_payment(db, reservation.id, "debit_card")


def test_successful_settlement_marks_reservation_paid(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")

    processed = processor.process_payment(db, payment.id, succeed)

    assert processed.status == PaymentStatus.completed
    db.expire_all()
    assert db.get(Reservation, reservation.id).payment_status == ReservationStatus.paid


def test_failed_settlement_keeps_reservation_pending(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")

    processed = processor.process_payment(db, payment.id, fail)

    assert processed.status == PaymentStatus.failed
    db.expire_all()
    assert db.get(Reservation, reservation.id).payment_status == ReservationStatus.pending


def test_retry_with_new_payment_after_failure(db, reservation):
    failed = processor.create_payment(db, reservation.id, "credit_card")
    processor.process_payment(db, failed.id, fail)

    retry = processor.create_payment(db, reservation.id, "debit_card")
    processor.process_payment(db, retry.id, succeed)

    db.expire_all()
    assert db.get(Payment, failed.id).status == PaymentStatus.failed
    assert db.get(Payment, retry.id).status == PaymentStatus.completed
    assert db.get(Reservation, reservation.id).payment_status == ReservationStatus.paid


@pytest.mark.parametrize("first_outcome", [succeed, fail])
def test_reprocessing_a_settled_payment_conflicts(db, reservation, first_outcome):
    payment = processor.create_payment(db, reservation.id, "credit_card")
    settled = processor.process_payment(db, payment.id, first_outcome).status

    with pytest.raises(ConflictError, match="already"):
        processor.process_payment(db, payment.id, succeed)

    db.expire_all()
    assert db.get(Payment, payment.id).status == settled


def test_process_unknown_payment(db, catalog):
    with pytest.raises(NotFoundError, match="Payment not found"):
        processor.process_payment(db, 999, succeed)


def test_settlement_rolled_back_when_reservation_no_longer_pending(db, reservation):
    """A reservation settled elsewhere must not leave this payment completed."""
    payment = processor.create_payment(db, reservation.id, "credit_card")
    db.query(Reservation).filter_by(id=reservation.id).update({"payment_status": ReservationStatus.paid})
    db.commit()

    with pytest.raises(ConflictError, match="no longer pending"):
        processor.process_payment(db, payment.id, succeed)

    db.expire_all()
    assert db.get(Payment, payment.id).status == PaymentStatus.pending


def test_outcome_is_drawn_once_per_settlement(db, reservation):
    calls = []

    def decide():
        calls.append(1)
        return True

    payment = processor.create_payment(db, reservation.id, "credit_card")
    processor.process_payment(db, payment.id, decide)

    assert len(calls) == 1


def test_confirm_is_a_pure_read(db, reservation):
    payment = processor.create_payment(db, reservation.id, "credit_card")
    processor.process_payment(db, payment.id, succeed)

    first = processor.get_payment(db, payment.id)
    first_state = (first.status, first.amount, first.updated_at)
    db.expire_all()
    second = processor.get_payment(db, payment.id)

    assert (second.status, second.amount, second.updated_at) == first_state


def test_confirm_unknown_payment(db, catalog):
    with pytest.raises(NotFoundError):
        processor.get_payment(db, 999)


def test_random_outcome_respects_extreme_rates():
    assert all(processor.random_outcome(1.0)() for _ in range(50))
    assert not any(processor.random_outcome(0.0)() for _ in range(50))


def test_random_outcome_default_rate(monkeypatch):
    monkeypatch.setattr(processor.random, "random", lambda: 0.79)
    assert processor.random_outcome()() is True

    monkeypatch.setattr(processor.random, "random", lambda: 0.8)
    assert processor.random_outcome()() is False
