# File: bookdb/models/book.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from bookdb.models.base import Base

class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    isbn = Column(String(20), nullable=True, unique=True)
    publisher = Column(String(255), nullable=True)
    year = Column(Integer, nullable=True)
    pages = Column(Integer, nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=True)
    format_id = Column(Integer, ForeignKey("formats.id"), nullable=True)
    borrowed_time = Column(DateTime, nullable=True)

    author = relationship("Author", back_populates="books")
    format = relationship("Format")

    # has_many to the junction rows; form fields named "genres" map onto this
    genres = relationship("BookGenre", back_populates="book", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_book_author", "author_id"),
    )
