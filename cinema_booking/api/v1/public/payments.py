from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.api.deps import ensure_owner_or_admin, get_current_user, get_payment_outcome
from cinema_booking.models.user import User
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.payment import Payment as PaymentSchema, PaymentCreate
from cinema_booking.services import payments as processor
from cinema_booking.services.payments import PaymentOutcome
from cinema_booking.services.reservations import get_reservation

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=ApiResponse[PaymentSchema], status_code=status.HTTP_201_CREATED)
def create_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Open a payment for a pending reservation; the amount is the seat's price."""
    reservation = get_reservation(db, data.reservation_id)
    ensure_owner_or_admin(reservation.user_id, current_user)

    payment = processor.create_payment(db, data.reservation_id, data.payment_method)
    return ApiResponse(
        message="Payment created successfully.",
        data=PaymentSchema.model_validate(payment),
    )


@router.post("/{payment_id}/process", response_model=ApiResponse[PaymentSchema])
def process_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    decide: PaymentOutcome = Depends(get_payment_outcome),
):
    """
    Settle a pending payment (simulated). On success the payment is
    `completed` and its reservation `paid`; on failure the payment is
    `failed` and the reservation stays `pending`.
    """
    payment = processor.get_payment(db, payment_id)
    ensure_owner_or_admin(payment.user_id, current_user)

    payment = processor.process_payment(db, payment_id, decide)
    return ApiResponse(
        message="Payment has been processed.",
        data=PaymentSchema.model_validate(payment),
    )


@router.get("/{payment_id}/confirm", response_model=ApiResponse[PaymentSchema])
def confirm_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    payment = processor.get_payment(db, payment_id)
    ensure_owner_or_admin(payment.user_id, current_user)

    return ApiResponse(
        message="Payment status has been confirmed.",
        data=PaymentSchema.model_validate(payment),
    )
