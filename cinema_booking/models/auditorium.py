from sqlalchemy import Column, String, DECIMAL, Integer, ForeignKey
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Auditorium(Base):
    __tablename__ = "auditoriums"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)

    rows = relationship("Row", back_populates="auditorium", cascade="all, delete-orphan")
    showtimes = relationship("Showtime", back_populates="auditorium")

class SeatType(Base):
    __tablename__ = "seat_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False) # standard, premium, ...
    price = Column(DECIMAL(10, 2), nullable=False)

    rows = relationship("Row", back_populates="seat_type")

class Row(Base):
    __tablename__ = "rows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    auditorium_id = Column(Integer, ForeignKey("auditoriums.id"), nullable=False, index=True)
    seat_type_id = Column(Integer, ForeignKey("seat_types.id"), nullable=False)
    name = Column(String(5), nullable=False) # row label: "A", "B", ...

    auditorium = relationship("Auditorium", back_populates="rows")
    seat_type = relationship("SeatType", back_populates="rows")
    seats = relationship("Seat", back_populates="row", cascade="all, delete-orphan")

class Seat(Base):
    __tablename__ = "seats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    row_id = Column(Integer, ForeignKey("rows.id"), nullable=False, index=True)
    seat_number = Column(String(10), nullable=False)

    row = relationship("Row", back_populates="seats")
    reservations = relationship("Reservation", back_populates="seat")
