
from cinema_booking.models.user import User
from cinema_booking.models.movie import Movie
from cinema_booking.models.auditorium import Auditorium, SeatType, Row, Seat
from cinema_booking.models.showtime import Showtime
from cinema_booking.models.reservation import Reservation, ReservationStatus
from cinema_booking.models.payment import Payment, PaymentStatus
