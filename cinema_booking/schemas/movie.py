from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field, HttpUrl, field_validator


def _check_release_year(v: int) -> int:
    if not 1800 <= v <= date.today().year:
        raise ValueError("Release year must be between 1800 and the current year.")
    return v


Genre = Annotated[str, Field(min_length=1, max_length=50)]
ReleaseYear = Annotated[int, AfterValidator(_check_release_year)]


class MovieCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    genre: List[Genre] = Field(min_length=1)
    release_year: ReleaseYear
    minutes: int = Field(gt=0)
    description: str = Field("", max_length=500)
    poster_image: Optional[HttpUrl] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


# Partial update (PUT /movies/{id}): only the fields sent are changed
class MovieUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    genre: Optional[List[Genre]] = Field(None, min_length=1)
    release_year: Optional[ReleaseYear] = None
    minutes: Optional[int] = Field(None, gt=0)
    description: Optional[str] = Field(None, max_length=500)
    poster_image: Optional[HttpUrl] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    # Fields may be omitted, but these columns can't be cleared
    @field_validator("title", "genre", "release_year", "minutes")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null.")
        return v


class Movie(BaseModel):
    id: int
    title: str
    genre: List[str]
    release_year: int
    minutes: int
    description: Optional[str] = None
    poster_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
