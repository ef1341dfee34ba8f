from cinema_booking.schemas.common import ApiResponse, PaginatedData, PaginationMeta, ErrorResponse, ValidationErrorResponse
from cinema_booking.schemas.user import User, UserCreate, AdminCreate, Token
from cinema_booking.schemas.movie import Movie, MovieCreate, MovieUpdate
from cinema_booking.schemas.showtime import Showtime, ShowtimeCreate
from cinema_booking.schemas.seat import ShowtimeSeat, AvailableSeat
from cinema_booking.schemas.reservation import Reservation, ReservationCreate
from cinema_booking.schemas.payment import Payment, PaymentCreate
