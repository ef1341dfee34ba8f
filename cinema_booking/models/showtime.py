from sqlalchemy import Column, Date, Time, DateTime, func, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Showtime(Base):
    __tablename__ = "showtimes"
    __table_args__ = (
        UniqueConstraint("movie_id", "date", "start_time", name="uq_showtimes_movie_slot"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False, index=True)
    auditorium_id = Column(Integer, ForeignKey("auditoriums.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    movie = relationship("Movie", back_populates="showtimes")
    auditorium = relationship("Auditorium", back_populates="showtimes")
    reservations = relationship("Reservation", back_populates="showtime", cascade="all, delete-orphan")
