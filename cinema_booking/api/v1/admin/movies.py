from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.api.deps import get_current_admin_user
from cinema_booking.models.user import User
from cinema_booking.models.movie import Movie
from cinema_booking.models.reservation import ACTIVE_STATUSES, Reservation
from cinema_booking.models.showtime import Showtime
from cinema_booking.schemas.common import ApiResponse
from cinema_booking.schemas.movie import Movie as MovieSchema, MovieCreate, MovieUpdate

router = APIRouter(prefix="/movies", tags=["Admin - Movies"])

DUPLICATE_TITLE = "Movie with this title already exists!"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _title_taken(db: Session, title: str, exclude_id: int = None) -> bool:
    query = db.query(Movie.id).filter(func.lower(Movie.title) == title.lower())
    if exclude_id is not None:
        query = query.filter(Movie.id != exclude_id)
    return query.first() is not None


def _get_movie_or_404(db: Session, movie_id: int) -> Movie:
    movie = db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="No movie found.")
    return movie


def _commit_or_title_conflict(db: Session, title: Optional[str], exclude_id: int = None) -> None:
    """Commit; a unique violation caused by a concurrent write of the same title becomes a 400."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if title and _title_taken(db, title, exclude_id=exclude_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_TITLE)
        raise


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post("", response_model=ApiResponse[MovieSchema], status_code=status.HTTP_201_CREATED)
def create_movie(
    data: MovieCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    if _title_taken(db, data.title):
        raise HTTPException(status_code=400, detail=DUPLICATE_TITLE)

    movie = Movie(**data.model_dump(mode="json"))
    db.add(movie)
    _commit_or_title_conflict(db, data.title)
    db.refresh(movie)
    return ApiResponse(message="Movie added successfully.", data=MovieSchema.model_validate(movie))


@router.put("/{movie_id}", response_model=ApiResponse[MovieSchema])
def update_movie(
    movie_id: int,
    data: MovieUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Partial update: only the fields present in the body are changed."""
    movie = _get_movie_or_404(db, movie_id)

    changes = data.model_dump(mode="json", exclude_unset=True)
    if changes.get("title") and _title_taken(db, changes["title"], exclude_id=movie_id):
        raise HTTPException(status_code=400, detail=DUPLICATE_TITLE)

    for field, value in changes.items():
        setattr(movie, field, value)
    _commit_or_title_conflict(db, changes.get("title"), exclude_id=movie_id)
    db.refresh(movie)
    return ApiResponse(message="Movie updated successfully.", data=MovieSchema.model_validate(movie))


@router.delete("/{movie_id}", response_model=ApiResponse[MovieSchema])
def delete_movie(
    movie_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Delete a movie together with its showtimes.
    Refused while any of those showtimes still has a pending or paid reservation.
    """
    movie = _get_movie_or_404(db, movie_id)

    has_active = (
        db.query(Reservation.id)
        .join(Showtime, Showtime.id == Reservation.showtime_id)
        .filter(Showtime.movie_id == movie_id, Reservation.payment_status.in_(ACTIVE_STATUSES))
        .first()
    )
    if has_active:
        raise HTTPException(status_code=400, detail="Movie has showtimes with active reservations.")

    deleted = MovieSchema.model_validate(movie)
    db.delete(movie)
    db.commit()
    return ApiResponse(message="Movie deleted successfully.", data=deleted)
