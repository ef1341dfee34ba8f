from decimal import Decimal
from pydantic import BaseModel


# Full seat chart of a showtime's auditorium (GET /showtimes/{id}/seats)
class ShowtimeSeat(BaseModel):
    seat_id: int
    row_name: str
    seat_number: str
    seat_type: str
    seat_type_price: Decimal

    class Config:
        from_attributes = True


# Free seat of a showtime (GET /showtimes/{id}/available-seats)
class AvailableSeat(BaseModel):
    showtime_id: int
    seat_id: int
    row_name: str
    seat_number: str

    class Config:
        from_attributes = True
