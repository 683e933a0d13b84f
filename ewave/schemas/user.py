from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ewave.schemas.vehicle import VehicleOut

class LoginRequest(BaseModel):
    # Optional so that missing fields reach the service and answer 400, not 422
    username: Optional[str] = None
    password: Optional[str] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    transaction_id: int
    user_id: int
    vehicle_id: int
    confirmation_number: str
    date: Optional[datetime] = None
    vehicle_name: str


class UserDataOut(BaseModel):
    userId: int
    transactions: List[TransactionOut] = Field(default_factory=list)
    recommendations: List[VehicleOut] = Field(default_factory=list)


class RegisterOut(BaseModel):
    userId: int
