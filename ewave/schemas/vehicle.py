from typing import Optional

from pydantic import BaseModel, ConfigDict

class VehicleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vehicle_id: int
    model_name: str
    image_url: Optional[str] = None
    description: Optional[str] = None
    price: float
    availability: int
    make: str
    year: Optional[int] = None
    tags: Optional[str] = None
    primary_category: Optional[str] = None  # first tag, read from the model property
