from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ewave.core.db import get_db
from ewave.schemas.purchase import PurchaseRequest
from ewave.services.purchase_service import PurchaseService

router = APIRouter(tags=["purchase"])


@router.post("/purchase", response_class=PlainTextResponse)
async def purchase(req: PurchaseRequest, db: AsyncSession = Depends(get_db)):
    """
    Purchase one unit of a vehicle. Answers the confirmation code as text;
    clients re-fetch /vehicle/{id} to see the new availability.
    """
    confirmation_number = await PurchaseService(db).purchase_core(req.user_id, req.vehicle_id)
    return PlainTextResponse(confirmation_number)
