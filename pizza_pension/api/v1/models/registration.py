from sqlalchemy import Column, Integer, Text, TIMESTAMP
from sqlalchemy.sql import func
from pizza_pension.core.db import Base

class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    pizza = Column(Text, nullable=False)
    drink = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.current_timestamp(), nullable=False)
