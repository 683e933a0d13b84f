import logging
from typing import List

from sqlalchemy import select, exists, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from ewave.core.metrics import track_performance
from ewave.models.transaction import Transaction
from ewave.models.vehicle import Vehicle
from ewave.services.exceptions import ClientInputError, StorageFault

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 5


class RecommendationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="RecommendationService")
    async def recommend_core(self, user_id: int, limit: int = MAX_RECOMMENDATIONS) -> List[Vehicle]:
        """
        Returns up to `limit` in-stock vehicles the user has never purchased.

        Order is random on every call, so repeated calls may return different
        subsets. An empty list means nothing is eligible.
        """
        if not user_id:
            raise ClientInputError("Missing user ID")

        # NOT EXISTS over the user's purchase history
        already_purchased = exists().where(
            Transaction.vehicle_id == Vehicle.vehicle_id,
            Transaction.user_id == user_id,
        )
        stmt = (
            select(Vehicle)
            .where(
                Vehicle.availability > 0,
                ~already_purchased,
            )
            .order_by(func.random())
            .limit(limit)
        )

        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Recommendation query failed for user {user_id}: {e}")
            raise StorageFault() from e
