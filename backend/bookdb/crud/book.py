# bookdb/crud/book.py
from sqlalchemy.orm import Session
from sqlalchemy import select
from bookdb.models import Book, BookGenre

def get(db: Session, book_id: int) -> Book | None:
    return db.get(Book, book_id)

def genre_ids(db: Session, book_id: int) -> set[int]:
    return set(db.scalars(select(BookGenre.genre_id).where(BookGenre.book_id == book_id)).all())
