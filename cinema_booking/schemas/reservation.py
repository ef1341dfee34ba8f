from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from cinema_booking.models.reservation import ReservationStatus


# Reservation: create (POST /reservations)
class ReservationCreate(BaseModel):
    # Defaults to the authenticated user; only admins may book for someone else
    user_id: Optional[int] = Field(None, ge=1)
    seat_id: int = Field(ge=1)
    showtime_id: int = Field(ge=1)


class Reservation(BaseModel):
    id: int
    user_id: int
    seat_id: int
    showtime_id: int
    payment_status: ReservationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
