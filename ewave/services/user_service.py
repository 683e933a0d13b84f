import logging
from typing import Dict, Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ewave.auth.passwords_handler import hash_password_async, verify_password_async
from ewave.core.metrics import track_performance
from ewave.models.transaction import Transaction
from ewave.models.user import User
from ewave.models.vehicle import Vehicle
from ewave.services.exceptions import (
    AuthenticationError,
    ClientInputError,
    ConflictError,
    StorageFault,
)
from ewave.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="UserService")
    async def authenticate_core(self, username: str, password: str) -> int:
        """Returns the user id for valid credentials, raises AuthenticationError otherwise."""
        if not username or not password:
            raise ClientInputError("Missing username and/or password")

        try:
            user = (
                await self.db.execute(select(User).where(User.username == username))
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Credential lookup failed: {e}")
            raise StorageFault() from e

        if user is None or not await verify_password_async(password, user.password):
            logger.info("Rejected login", extra={'username': username})
            raise AuthenticationError()
        return user.user_id

    @track_performance(service_name="UserService")
    async def get_user_data_core(self, user_id: int) -> Dict[str, Any]:
        """
        Builds the signed-in view: purchase history (newest first) and recommendations.
        """
        stmt = (
            select(
                Transaction.transaction_id,
                Transaction.user_id,
                Transaction.vehicle_id,
                Transaction.confirmation_number,
                Transaction.date,
                Vehicle.model_name.label("vehicle_name"),
            )
            .join(Vehicle, Vehicle.vehicle_id == Transaction.vehicle_id)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.transaction_id.desc())
        )
        try:
            rows = (await self.db.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.error(f"Transaction history query failed for user {user_id}: {e}")
            raise StorageFault() from e

        recommendations = await RecommendationService(self.db).recommend_core(user_id)
        return {
            "userId": user_id,
            "transactions": [dict(row._mapping) for row in rows],
            "recommendations": recommendations,
        }

    @track_performance(service_name="UserService")
    async def register_core(self, username: str, password: str) -> int:
        if not username or not password:
            raise ClientInputError("Missing username and/or password")

        try:
            existing_user = (
                await self.db.execute(select(User.user_id).where(User.username == username))
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Username lookup failed: {e}")
            raise StorageFault() from e

        if existing_user is not None:
            raise ConflictError("Username already registered")

        new_user = User(
            username=username,
            password=await hash_password_async(password),
        )
        self.db.add(new_user)

        try:
            await self.db.commit()
        except IntegrityError as e:
            # handle race where another request created the same username
            await self.db.rollback()
            raise ConflictError("Username already registered") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Storing user failed: {e}")
            raise StorageFault() from e

        logger.info("User registered", extra={'user_id': new_user.user_id})
        return new_user.user_id
