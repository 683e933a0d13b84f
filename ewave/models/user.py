from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ewave.core.db import Base

class User(Base):
    __tablename__ = "users"
    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # bcrypt hash

    transactions = relationship("Transaction", back_populates="user")
    reviews = relationship("Review", back_populates="user")
