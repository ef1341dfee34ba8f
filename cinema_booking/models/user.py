from sqlalchemy import Column, String, DateTime, func, Integer
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user") # user, admin
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    reservations = relationship("Reservation", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
