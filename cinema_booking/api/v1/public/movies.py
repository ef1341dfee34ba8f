from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session

from cinema_booking.db.session import get_db
from cinema_booking.models.movie import Movie
from cinema_booking.schemas.common import ApiResponse, PaginatedData, PaginationMeta
from cinema_booking.schemas.movie import Movie as MovieSchema

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=ApiResponse[PaginatedData[MovieSchema]])
def list_movies(
    genre: Optional[List[str]] = Query(None, description="Filter by genre (repeatable)"),
    title: Optional[str] = Query(None, description="Filter by title (partial match)"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Return movies newest first.
    Genre and title filters are case-insensitive partial matches, OR-combined.
    """
    query = db.query(Movie)

    filters = [
        func.lower(cast(Movie.genre, String)).like(f"%{g.lower()}%")
        for g in (genre or [])
    ]
    if title:
        filters.append(func.lower(Movie.title).like(f"%{title.lower()}%"))
    if filters:
        query = query.filter(or_(*filters))

    total = query.count()
    movies = (
        query.order_by(Movie.created_at.desc(), Movie.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    if not movies:
        raise HTTPException(status_code=404, detail="No movies found.")

    return ApiResponse(
        message="Movies fetched successfully.",
        data=PaginatedData(
            data=[MovieSchema.model_validate(m) for m in movies],
            meta=PaginationMeta(
                total_items=total,
                current_page=page,
                total_pages=-(-total // limit),
            ),
        ),
    )
