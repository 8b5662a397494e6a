# bookdb/crud/author.py
from sqlalchemy.orm import Session
from sqlalchemy import select
from bookdb.models import Author

def get(db: Session, author_id: int) -> Author | None:
    return db.get(Author, author_id)

def get_by_name(db: Session, name: str) -> Author | None:
    return db.scalar(select(Author).where(Author.name == name))
