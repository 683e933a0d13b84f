from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ewave.core.db import get_db
from ewave.schemas.feedback import VehicleDetailOut
from ewave.schemas.vehicle import VehicleOut
from ewave.services.catalog_service import CatalogService, parse_filters
from ewave.services.feedback_service import FeedbackService

router = APIRouter(tags=["vehicles"])


@router.get("/vehicles", response_model=List[VehicleOut])
async def search_vehicles(
    qry: Optional[str] = None,
    filters: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """Search the catalog by free text (`qry`) and comma-joined tags (`filters`)."""
    return await CatalogService(db).search_core(qry, parse_filters(filters))


@router.get("/vehicle/{vehicle_id}", response_model=VehicleDetailOut)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    vehicle = await CatalogService(db).get_vehicle_core(vehicle_id)
    feedback = await FeedbackService(db).get_feedback_core(vehicle_id)
    return {
        "vehicleInfo": vehicle,
        "feedbackData": feedback,
    }
