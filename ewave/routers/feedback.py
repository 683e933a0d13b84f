from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ewave.core.db import get_db
from ewave.schemas.feedback import FeedbackRequest
from ewave.services.feedback_service import FeedbackService

router = APIRouter(tags=["feedback"])


@router.post("/feedback", response_class=PlainTextResponse)
async def submit_feedback(req: FeedbackRequest, db: AsyncSession = Depends(get_db)):
    await FeedbackService(db).add_feedback_core(
        user_id=req.user_id,
        vehicle_id=req.vehicle_id,
        rating=req.rating,
        review_text=req.review_text,
    )
    return PlainTextResponse("Review added successfully!")
