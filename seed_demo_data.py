"""
Seed a demo seating chart, a movie with showtimes and an admin account.

Seating charts have no API: seat types, auditoriums, rows and seats are
configured here. Safe to re-run; existing rows are left untouched.

    python seed_demo_data.py
"""
import logging
from datetime import date, time, timedelta
from decimal import Decimal

from cinema_booking.core.config import settings
from cinema_booking.core.security import get_password_hash
from cinema_booking.db.base import Base
from cinema_booking.db.init_db import create_database
from cinema_booking.db.session import SessionLocal, engine
from cinema_booking.models import Auditorium, Movie, Row, Seat, SeatType, Showtime, User

logger = logging.getLogger("seed")

SEAT_TYPES = {"standard": Decimal("12.50"), "premium": Decimal("18.00")}
# row label -> seat type
ROWS = {"A": "standard", "B": "standard", "C": "standard", "D": "premium", "E": "premium"}
SEATS_PER_ROW = 10
SHOW_TIMES = [time(14, 0), time(17, 30), time(21, 0)]


def seed(db) -> None:
    seat_types = {}
    for name, price in SEAT_TYPES.items():
        seat_type = db.query(SeatType).filter(SeatType.name == name).first()
        if not seat_type:
            seat_type = SeatType(name=name, price=price)
            db.add(seat_type)
        seat_types[name] = seat_type
    db.flush()

    auditorium = db.query(Auditorium).filter(Auditorium.name == "Screen 1").first()
    if not auditorium:
        auditorium = Auditorium(name="Screen 1")
        db.add(auditorium)
        db.flush()
        for label, type_name in ROWS.items():
            row = Row(auditorium_id=auditorium.id, name=label, seat_type_id=seat_types[type_name].id)
            db.add(row)
            db.flush()
            db.add_all(
                Seat(row_id=row.id, seat_number=str(n)) for n in range(1, SEATS_PER_ROW + 1)
            )
        logger.info("Created auditorium %s with %d seats", auditorium.name, len(ROWS) * SEATS_PER_ROW)

    movie = db.query(Movie).filter(Movie.title == "The Matrix").first()
    if not movie:
        movie = Movie(
            title="The Matrix",
            genre=["Action", "Sci-Fi"],
            release_year=1999,
            minutes=136,
            description="A hacker learns the true nature of his reality.",
        )
        db.add(movie)
        db.flush()

    tomorrow = date.today() + timedelta(days=1)
    for start in SHOW_TIMES:
        exists = db.query(Showtime.id).filter(
            Showtime.movie_id == movie.id,
            Showtime.date == tomorrow,
            Showtime.start_time == start,
        ).first()
        if not exists:
            db.add(Showtime(movie_id=movie.id, auditorium_id=auditorium.id, date=tomorrow, start_time=start))

    if not db.query(User).filter(User.username == "admin").first():
        db.add(User(
            username="admin",
            email="admin@example.com",
            password_hash=get_password_hash("adminpassword"),
            role="admin",
        ))
        logger.info("Created admin user 'admin' (password: adminpassword)")

    db.commit()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    create_database()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
        logger.info("Demo data ready.")
    finally:
        db.close()
