from datetime import date as date_type, time, datetime
from typing import Optional

from pydantic import BaseModel, Field


class ShowtimeCreate(BaseModel):
    movie_id: int = Field(ge=1)
    auditorium_id: int = Field(ge=1)
    date: date_type
    start_time: time

    class Config:
        json_schema_extra = {
            "example": {"movie_id": 1, "auditorium_id": 1, "date": "2026-11-01", "start_time": "19:30"}
        }


class Showtime(BaseModel):
    id: int
    movie_id: int
    auditorium_id: int
    date: date_type
    start_time: time
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
