# File: bookdb/models/author.py
from sqlalchemy import Column, Integer, String, Date, Boolean
from sqlalchemy.orm import relationship
from bookdb.models.base import Base

class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    country = Column(String(100), nullable=True)
    birthdate = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    books = relationship("Book", back_populates="author")
