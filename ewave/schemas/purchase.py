from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

class PurchaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[int] = Field(None, alias="userId")
    vehicle_id: Optional[int] = Field(None, alias="vehicleId")
