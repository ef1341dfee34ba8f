from typing import Optional
from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field

from cinema_booking.models.payment import PaymentStatus


# Payment: create (POST /payments)
class PaymentCreate(BaseModel):
    reservation_id: int = Field(ge=1)
    payment_method: str = Field(min_length=1, max_length=50)


class Payment(BaseModel):
    id: int
    reservation_id: int
    user_id: int
    amount: Decimal
    payment_method: str
    status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
