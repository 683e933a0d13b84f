from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ewave.core.db import Base

class Transaction(Base):
    __tablename__ = "transactions"
    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.vehicle_id"), nullable=False)
    confirmation_number = Column(String(8), unique=True, nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="transactions")
    vehicle = relationship("Vehicle", back_populates="transactions")
