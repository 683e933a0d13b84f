import logging
from typing import Iterable, List, Optional

from sqlalchemy import select, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Select

from ewave.core.metrics import track_performance
from ewave.models.vehicle import Vehicle
from ewave.services.exceptions import NotFoundError, StorageFault

logger = logging.getLogger(__name__)


def parse_filters(filters: Optional[str]) -> List[str]:
    """
    Splits a comma-joined filter string into an ordered list of distinct tags.

    Surrounding whitespace is stripped and empty entries are dropped, so
    "sedan, electric," yields ["sedan", "electric"].
    """
    if not filters:
        return []
    tags = []
    for raw in filters.split(","):
        tag = raw.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def build_search_statement(term: Optional[str], tags: Iterable[str]) -> Select:
    """
    Builds the catalog filter query from a free-text term and a set of tags.

    Rules:
        - term: case-insensitive substring of model_name, description OR tags,
          restricted to vehicles with availability > 0
        - tags: every tag must be a substring of the raw tag string (AND)
        - both present: the two predicates are ANDed
        - neither present: the whole catalog

    Tag-only filtering intentionally keeps sold-out vehicles; only the
    free-text predicate carries the availability restriction.

    All user input is bound as parameters and LIKE wildcards in it are
    escaped, so '%' or '_' in a search term match literally.
    """
    term = (term or "").strip()
    conditions = []

    if term:
        conditions.append(
            and_(
                Vehicle.availability > 0,
                or_(
                    Vehicle.model_name.icontains(term, autoescape=True),
                    Vehicle.description.icontains(term, autoescape=True),
                    Vehicle.tags.icontains(term, autoescape=True),
                ),
            )
        )

    for tag in tags:
        conditions.append(Vehicle.tags.icontains(tag, autoescape=True))

    stmt = select(Vehicle)
    if conditions:
        stmt = stmt.where(and_(*conditions))
    return stmt.order_by(Vehicle.vehicle_id)


class CatalogService:
    """Read-side access to the vehicle catalog: search and single-vehicle lookup."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_performance(service_name="CatalogService")
    async def search_core(self, term: Optional[str], tags: Iterable[str]) -> List[Vehicle]:
        """
        Runs the catalog search.

        Raises:
            NotFoundError: no vehicle matches (an empty result, not a failure)
            StorageFault: the store query failed
        """
        stmt = build_search_statement(term, list(tags))
        try:
            result = await self.db.execute(stmt)
            vehicles = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Catalog search failed: {e}")
            raise StorageFault() from e

        if not vehicles:
            raise NotFoundError("Results not found")
        return vehicles

    @track_performance(service_name="CatalogService")
    async def get_vehicle_core(self, vehicle_id: int) -> Vehicle:
        try:
            result = await self.db.execute(
                select(Vehicle).where(Vehicle.vehicle_id == vehicle_id)
            )
            vehicle = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Vehicle lookup failed for {vehicle_id}: {e}")
            raise StorageFault() from e

        if vehicle is None:
            raise NotFoundError("Vehicle not found")
        return vehicle
