from fastapi import APIRouter

from cinema_booking.schemas.common import ErrorResponse, ValidationErrorResponse

# Auth
from cinema_booking.api.v1.public.auth import router as auth_router

# Public: catalog and availability
from cinema_booking.api.v1.public.movies import router as public_movies_router
from cinema_booking.api.v1.public.showtimes import router as public_showtimes_router

# Public: reservations & payments (bearer auth)
from cinema_booking.api.v1.public.reservations import router as reservations_router
from cinema_booking.api.v1.public.payments import router as payments_router

# Admin
from cinema_booking.api.v1.admin.movies import router as movies_router
from cinema_booking.api.v1.admin.showtimes import router as showtimes_router
from cinema_booking.api.v1.admin.reservations import router as admin_reservations_router

# Error bodies rendered by cinema_booking.api.exception_handlers
api_router = APIRouter(
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)

# --- Auth ---
api_router.include_router(auth_router)

# --- Public: catalog ---
api_router.include_router(public_movies_router)
api_router.include_router(public_showtimes_router)

# --- Public: booking lifecycle ---
api_router.include_router(reservations_router)
api_router.include_router(payments_router)

# --- Admin ---
api_router.include_router(movies_router)
api_router.include_router(showtimes_router)
api_router.include_router(admin_reservations_router)
