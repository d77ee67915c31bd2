"""
Stay bookings.
"""
import logging
from typing import Optional

from ..core.errors import NotFoundError, ValidationError
from ..models.places import Booking, BookingRequest
from . import catalog
from .store import Database, db

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, database: Database = db):
        self.bookings = database.collection("bookings")

    def book(self, user_id: str, accommodation_id: str, request: BookingRequest) -> Booking:
        """Create a pending booking priced at rate x nights x rooms."""
        if not request.check_in or not request.check_out or not request.guests:
            raise ValidationError("Check-in, check-out dates and number of guests are required")
        if request.check_out <= request.check_in:
            raise ValidationError("Check-out date must be after check-in date")

        accommodation = catalog.find_accommodation(accommodation_id)
        if accommodation is None:
            raise NotFoundError("Accommodation not found")

        nights = (request.check_out - request.check_in).days
        booking = Booking(
            user_id=user_id,
            accommodation_id=accommodation_id,
            accommodation_name=accommodation["name"],
            check_in=request.check_in,
            check_out=request.check_out,
            guests=request.guests,
            rooms=request.rooms,
            nights=nights,
            guest_details=request.guest_details,
            total_amount=accommodation["price"] * nights * request.rooms,
        )
        self.bookings.add(booking.id, booking)
        logger.info(f"Booking {booking.id} created for {user_id} at {accommodation_id}")
        return booking

    def my_bookings(
        self,
        user_id: str,
        status: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Booking], dict]:
        bookings = sorted(self.bookings.where(user_id=user_id), key=lambda b: b.created_at, reverse=True)
        if status:
            bookings = [b for b in bookings if b.status == status]
        total = len(bookings)
        return bookings[offset:offset + limit], {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": total > offset + limit,
        }


booking_service = BookingService()


def get_booking_service() -> BookingService:
    return booking_service
