"""Fixtures: in-memory SQLite database, seeded seating chart, API client."""

import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_SECRET_KEY"] = "test-admin-secret"

from datetime import date, time, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cinema_booking.api.deps import get_payment_outcome
from cinema_booking.core.security import create_access_token, get_password_hash
from cinema_booking.db.base import Base
from cinema_booking.db.session import get_db
from cinema_booking.main import app
from cinema_booking.models import Auditorium, Movie, Row, Seat, SeatType, Showtime, User

API = "/api/v1"
PASSWORD = "password123"
# bcrypt is slow on purpose; hash the shared test password once
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def catalog(db):
    """
    Seating chart used across the tests.

    - users 1 alice, 2 bob (role user), 3 admin
    - auditorium 1: row A standard 12.50 → seats 1-6, row B premium 18.00 → seats 7-8
    - auditorium 2: row C standard → seats 9-10
    - showtimes 1-3 in auditorium 1, showtime 4 in auditorium 2
    """
    users = [
        User(username="alice", email="alice@example.com", password_hash=PASSWORD_HASH, role="user"),
        User(username="bob", email="bob@example.com", password_hash=PASSWORD_HASH, role="user"),
        User(username="admin", email="admin@example.com", password_hash=PASSWORD_HASH, role="admin"),
    ]
    db.add_all(users)

    standard = SeatType(name="standard", price=Decimal("12.50"))
    premium = SeatType(name="premium", price=Decimal("18.00"))
    db.add_all([standard, premium])

    main_hall = Auditorium(name="Screen 1")
    small_hall = Auditorium(name="Screen 2")
    db.add_all([main_hall, small_hall])
    db.flush()

    row_a = Row(auditorium_id=main_hall.id, name="A", seat_type_id=standard.id)
    row_b = Row(auditorium_id=main_hall.id, name="B", seat_type_id=premium.id)
    row_c = Row(auditorium_id=small_hall.id, name="C", seat_type_id=standard.id)
    db.add_all([row_a, row_b, row_c])
    db.flush()

    for n in range(1, 7):
        db.add(Seat(row_id=row_a.id, seat_number=str(n)))
        db.flush()
    for n in range(1, 3):
        db.add(Seat(row_id=row_b.id, seat_number=str(n)))
        db.flush()
    for n in range(1, 3):
        db.add(Seat(row_id=row_c.id, seat_number=str(n)))
        db.flush()

    movie = Movie(title="The Matrix", genre=["Action", "Sci-Fi"], release_year=1999, minutes=136)
    db.add(movie)
    db.flush()

    tomorrow = date.today() + timedelta(days=1)
    for start in (time(14, 0), time(17, 30), time(21, 0)):
        db.add(Showtime(movie_id=movie.id, auditorium_id=main_hall.id, date=tomorrow, start_time=start))
        db.flush()
    db.add(Showtime(movie_id=movie.id, auditorium_id=small_hall.id, date=tomorrow, start_time=time(20, 0)))
    db.commit()

    return SimpleNamespace(
        alice=1, bob=2, admin=3,
        movie=movie.id,
        main_hall=main_hall.id, small_hall=small_hall.id,
        standard_seats=[1, 2, 3, 4, 5, 6], premium_seats=[7, 8], small_hall_seats=[9, 10],
        showtimes=[1, 2, 3], small_hall_showtime=4,
        tomorrow=tomorrow,
    )


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Settlement succeeds unless a test says otherwise
    app.dependency_overrides[get_payment_outcome] = lambda: (lambda: True)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def force_payment_outcome():
    """Make every subsequent settlement succeed (True) or fail (False)."""
    def _force(succeeds: bool):
        app.dependency_overrides[get_payment_outcome] = lambda: (lambda: succeeds)
    return _force


def auth_headers(user_id: int, role: str = "user") -> dict:
    token = create_access_token(subject=str(user_id), claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_headers(catalog):
    return auth_headers(catalog.alice)


@pytest.fixture()
def bob_headers(catalog):
    return auth_headers(catalog.bob)


@pytest.fixture()
def admin_headers(catalog):
    return auth_headers(catalog.admin, role="admin")
