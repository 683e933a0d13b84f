import logging
import secrets

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from ewave.core.metrics import track_performance
from ewave.core.prometheus_metrics import prometheus_collector
from ewave.models.transaction import Transaction
from ewave.models.user import User
from ewave.models.vehicle import Vehicle
from ewave.services.exceptions import ClientInputError, StorageFault, UnavailableError, UnknownBuyerError

logger = logging.getLogger(__name__)

CONFIRMATION_CODE_BYTES = 4  # 8 lowercase hex characters
MAX_CODE_ATTEMPTS = 3


def generate_confirmation_code() -> str:
    """Returns 8 lowercase hex characters drawn uniformly at random."""
    return secrets.token_hex(CONFIRMATION_CODE_BYTES)


class PurchaseService:
    """
    Purchase workflow for catalog vehicles.

    A purchase is one unit of work on the session:
    - conditional decrement of the vehicle's availability
    - insertion of the transaction row carrying the confirmation code
    Both are committed together or rolled back together, so a transaction
    row never exists without its decrement and vice versa.
    """

    def __init__(self, db: AsyncSession):
        """
        Args:
            db (AsyncSession): Request-scoped SQLAlchemy async session. The
                              service commits or rolls it back itself.
        """
        self.db = db

    @track_performance(service_name="PurchaseService")
    async def purchase_core(self, user_id: int, vehicle_id: int) -> str:
        """
        Buys one unit of a vehicle for a user and returns the confirmation code.

        Args:
            user_id (int): Buyer's user id
            vehicle_id (int): Vehicle to purchase

        Returns:
            str: 8-character lowercase hex confirmation code

        Raises:
            ClientInputError: user_id or vehicle_id missing
            UnknownBuyerError: no user with that id (nothing applied)
            UnavailableError: vehicle unknown or sold out
            StorageFault: the store rejected or failed the unit (nothing applied)

        Concurrency Control:
            - The availability check lives in the UPDATE's WHERE clause
              (availability > 0), so check and decrement are one statement
            - Zero affected rows means someone else took the last unit or the
              vehicle does not exist
            - The write lock taken by the UPDATE is held until commit, so a
              concurrent buyer waits and then sees the decremented value
        """
        if not user_id or not vehicle_id:
            raise ClientInputError("Missing user ID or product ID")

        confirmation_number = generate_confirmation_code()

        try:
            buyer = await self.db.execute(select(User.user_id).where(User.user_id == user_id))
            if buyer.scalar_one_or_none() is None:
                prometheus_collector.record_purchase("rejected")
                raise UnknownBuyerError()

            decrement = await self.db.execute(
                update(Vehicle)
                .where(
                    Vehicle.vehicle_id == vehicle_id,
                    Vehicle.availability > 0,
                )
                .values(availability=Vehicle.availability - 1)
                .execution_options(synchronize_session="evaluate")
            )

            if decrement.rowcount != 1:
                await self.db.rollback()
                prometheus_collector.record_purchase("unavailable")
                raise UnavailableError()

            confirmation_number = await self._ensure_unique_code(confirmation_number)

            self.db.add(
                Transaction(
                    user_id=user_id,
                    vehicle_id=vehicle_id,
                    confirmation_number=confirmation_number,
                )
            )
            await self.db.commit()

        except (SQLAlchemyError, StorageFault) as e:
            await self.db.rollback()
            prometheus_collector.record_purchase("failed")
            logger.error(f"Purchase of vehicle {vehicle_id} by user {user_id} rolled back: {e}")
            raise StorageFault() from e

        prometheus_collector.record_purchase("completed")
        logger.info(
            "Purchase completed",
            extra={
                'user_id': user_id,
                'vehicle_id': vehicle_id,
                'confirmation_number': confirmation_number,
            }
        )
        return confirmation_number

    async def _ensure_unique_code(self, code: str) -> str:
        """Regenerate the code while it collides with an existing transaction."""
        for _ in range(MAX_CODE_ATTEMPTS):
            taken = await self.db.execute(
                select(Transaction.transaction_id)
                .where(Transaction.confirmation_number == code)
                .limit(1)
            )
            if taken.scalar_one_or_none() is None:
                return code
            logger.warning("Confirmation code collision, regenerating")
            code = generate_confirmation_code()

        # The UNIQUE constraint is the backstop; running out of attempts is a store fault
        logger.error(f"No unique confirmation code after {MAX_CODE_ATTEMPTS} attempts")
        raise StorageFault()
