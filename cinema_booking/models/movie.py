from sqlalchemy import Column, String, DateTime, func, Text, Integer, JSON
from sqlalchemy.orm import relationship
from cinema_booking.db.session import Base

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), unique=True, nullable=False, index=True)
    genre = Column(JSON, nullable=False, default=list) # ["Action", "Sci-Fi"]
    release_year = Column(Integer, nullable=False)
    minutes = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    poster_image = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    showtimes = relationship("Showtime", back_populates="movie", cascade="all, delete-orphan")
