from sqlalchemy import Column, Integer, String, Text, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from ewave.core.db import Base

class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint("availability >= 0", name="ck_vehicles_availability_non_negative"),
        CheckConstraint("price >= 0", name="ck_vehicles_price_non_negative"),
    )

    vehicle_id = Column(Integer, primary_key=True, autoincrement=True)
    model_name = Column(String, unique=True, nullable=False)
    image_url = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    availability = Column(Integer, nullable=False, default=0)
    make = Column(String, nullable=False)
    year = Column(Integer, nullable=True)
    tags = Column(String, nullable=True)  # 'sedan,electric,...' first tag is the display category

    transactions = relationship("Transaction", back_populates="vehicle")
    reviews = relationship("Review", back_populates="vehicle")

    @property
    def primary_category(self):
        if not self.tags:
            return None
        return self.tags.split(",")[0].strip() or None
