# File: bookdb/models/format.py
from sqlalchemy import Column, Integer, String, Boolean
from bookdb.models.base import Base

class Format(Base):
    __tablename__ = "formats"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
