# File: bookdb/models/book_genre.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from bookdb.models.base import Base

class BookGenre(Base):
    """Mapping table between books and genres (two columns, two relationships)."""
    __tablename__ = "books_genres"

    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    genre_id = Column(Integer, ForeignKey("genres.id"), primary_key=True)

    book = relationship("Book", back_populates="genres")
    genre = relationship("Genre")
