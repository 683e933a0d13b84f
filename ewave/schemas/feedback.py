from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ewave.schemas.vehicle import VehicleOut

class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[int] = Field(None, alias="userId")
    vehicle_id: Optional[int] = Field(None, alias="vehicleId")
    rating: Optional[int] = None
    review_text: Optional[str] = Field(None, alias="reviewText")

    @field_validator("rating", mode="before")
    @classmethod
    def reject_boolean_rating(cls, v):
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(v, bool):
            raise ValueError("rating must be a number")
        return v


class ReviewOut(BaseModel):
    user_id: int
    username: str
    rating: int
    review_text: str
    date_submitted: Optional[datetime] = None


class FeedbackData(BaseModel):
    averageRating: Optional[float] = None  # None means "no rating yet", never 0
    reviews: List[ReviewOut] = Field(default_factory=list)


class VehicleDetailOut(BaseModel):
    vehicleInfo: VehicleOut
    feedbackData: FeedbackData
