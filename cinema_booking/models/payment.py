import enum
from sqlalchemy import Column, String, DateTime, func, DECIMAL, Integer, ForeignKey, Index, Enum as SAEnum, text
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class PaymentStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"

# Failed attempts don't count: the reservation stays pending and can be paid again
OPEN_STATUSES = (PaymentStatus.pending, PaymentStatus.completed)

_OPEN_PREDICATE = text("status IN ('pending', 'completed')")

class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        Index(
            "uq_payments_open_reservation",
            "reservation_id",
            unique=True,
            postgresql_where=_OPEN_PREDICATE,
            sqlite_where=_OPEN_PREDICATE,
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(DECIMAL(10, 2), nullable=False)
    payment_method = Column(String(50), nullable=False)
    status = Column(
        SAEnum(PaymentStatus, native_enum=False, length=20),
        nullable=False,
        default=PaymentStatus.pending,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    reservation = relationship("Reservation", back_populates="payments")
    user = relationship("User")
