import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Any

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from ewave.core.metrics import track_performance
from ewave.core.prometheus_metrics import prometheus_collector
from ewave.models.review import Review
from ewave.models.user import User
from ewave.models.vehicle import Vehicle
from ewave.services.exceptions import ClientInputError, InvalidReferenceError, StorageFault

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def round_rating(value) -> Optional[float]:
    """Rounds an average rating half-up to one decimal. None stays None (unrated)."""
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def validate_feedback(user_id, vehicle_id, rating, review_text):
    if not user_id or not vehicle_id:
        raise ClientInputError()
    if rating is None or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        raise ClientInputError()
    if not review_text or not review_text.strip():
        raise ClientInputError()


class FeedbackService:
    """Ratings and reviews: aggregation for a vehicle and immutable submission."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="FeedbackService")
    async def get_feedback_core(self, vehicle_id: int) -> Dict[str, Any]:
        """
        Aggregates feedback for one vehicle.

        Returns:
            dict: {"averageRating": float | None, "reviews": list[dict]}
                  averageRating is the mean rating rounded to one decimal,
                  or None when the vehicle has no reviews yet.
                  reviews are newest first.
        """
        avg_stmt = select(func.avg(Review.rating)).where(Review.vehicle_id == vehicle_id)
        reviews_stmt = (
            select(
                Review.user_id,
                User.username,
                Review.rating,
                Review.review_text,
                Review.date_submitted,
            )
            .join(User, User.user_id == Review.user_id)
            .where(Review.vehicle_id == vehicle_id)
            # Ties on the timestamp fall back to insertion order
            .order_by(Review.date_submitted.desc(), Review.review_id.desc())
        )

        try:
            average = (await self.db.execute(avg_stmt)).scalar()
            rows = (await self.db.execute(reviews_stmt)).all()
        except SQLAlchemyError as e:
            logger.error(f"Feedback query failed for vehicle {vehicle_id}: {e}")
            raise StorageFault() from e

        reviews: List[Dict[str, Any]] = [dict(row._mapping) for row in rows]
        return {
            "averageRating": round_rating(average),
            "reviews": reviews,
        }

    @track_performance(service_name="FeedbackService")
    async def add_feedback_core(
        self,
        user_id: int,
        vehicle_id: int,
        rating: int,
        review_text: str
    ) -> Review:
        """
        Stores a review after validating input and references.

        Raises:
            ClientInputError: missing ids, rating outside 1-5 or empty text
            InvalidReferenceError: user or vehicle does not exist
            StorageFault: the store failed
        """
        validate_feedback(user_id, vehicle_id, rating, review_text)

        try:
            user_exists = (
                await self.db.execute(select(User.user_id).where(User.user_id == user_id))
            ).scalar_one_or_none()
            vehicle_exists = (
                await self.db.execute(select(Vehicle.vehicle_id).where(Vehicle.vehicle_id == vehicle_id))
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Reference check failed for feedback: {e}")
            raise StorageFault() from e

        if user_exists is None or vehicle_exists is None:
            raise InvalidReferenceError()

        review = Review(
            user_id=user_id,
            vehicle_id=vehicle_id,
            rating=rating,
            review_text=review_text,
        )

        try:
            self.db.add(review)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Storing review for vehicle {vehicle_id} failed: {e}")
            raise StorageFault() from e

        prometheus_collector.record_review()
        logger.info(
            "Review added",
            extra={'user_id': user_id, 'vehicle_id': vehicle_id, 'rating': rating}
        )
        return review
