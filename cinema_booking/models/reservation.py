import enum
from sqlalchemy import Column, DateTime, func, Integer, ForeignKey, Index, Enum as SAEnum, text
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class ReservationStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"
    cancelled = "cancelled"

# A reservation in one of these states holds its seat for the showtime
ACTIVE_STATUSES = (ReservationStatus.pending, ReservationStatus.paid)

_ACTIVE_PREDICATE = text("payment_status IN ('pending', 'paid')")

class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        # At most one active reservation per seat and showtime
        Index(
            "uq_reservations_active_seat",
            "seat_id", "showtime_id",
            unique=True,
            postgresql_where=_ACTIVE_PREDICATE,
            sqlite_where=_ACTIVE_PREDICATE,
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    seat_id = Column(Integer, ForeignKey("seats.id"), nullable=False)
    showtime_id = Column(Integer, ForeignKey("showtimes.id"), nullable=False, index=True)
    payment_status = Column(
        SAEnum(ReservationStatus, native_enum=False, length=20),
        nullable=False,
        default=ReservationStatus.pending,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    user = relationship("User", back_populates="reservations")
    seat = relationship("Seat", back_populates="reservations")
    showtime = relationship("Showtime", back_populates="reservations")
    payments = relationship("Payment", back_populates="reservation", cascade="all, delete-orphan")
