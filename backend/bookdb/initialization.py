import logging
from datetime import datetime
from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from bookdb.core.database import engine
from bookdb.models import Base, Author, Book, Format, Genre

logger = logging.getLogger("uvicorn")

# Lookup rows created on an empty database so select lists have options
DEFAULT_FORMATS = ["Paperback", "Hardcover", "Ebook", "Audiobook"]
DEFAULT_GENRES = ["Fiction", "Mystery", "Science Fiction", "Fantasy", "History", "Biography", "Poetry"]


class ApplicationInitializer:
    """Creates the schema and seeds the lookup tables used by the forms."""

    def __init__(self, bind=None):
        self.bind = bind if bind is not None else engine

    def initialize_database(self, db: Session) -> dict:
        logger.info("🔍 Checking database initialization status...")
        start_time = datetime.now()
        try:
            logger.info("🛠️ Creating database schema...")
            Base.metadata.create_all(bind=self.bind)
            logger.info("✅ Database schema created successfully")

            seeded = {
                "formats": self._seed_lookup(db, Format, DEFAULT_FORMATS),
                "genres": self._seed_lookup(db, Genre, DEFAULT_GENRES),
            }
            db.commit()

            elapsed = (datetime.now() - start_time).total_seconds()
            return {
                "database_ready": True,
                "seeded": seeded,
                "initialization_time": elapsed,
            }

        except Exception as e:
            db.rollback()
            logger.error(f"❌ Database initialization failed: {e}")
            return {
                "database_ready": False,
                "seeded": {},
                "initialization_time": 0.0,
                "error": str(e),
            }

    def _seed_lookup(self, db: Session, model, names: list[str]) -> int:
        """Insert default rows into an empty lookup table. Returns rows added."""
        existing = db.scalar(select(func.count()).select_from(model)) or 0
        if existing:
            logger.info(f"✅ {model.__tablename__} already populated with {existing:,} rows")
            return 0
        db.add_all(model(name=name, is_active=True) for name in names)
        logger.info(f"📦 Seeded {len(names)} {model.__tablename__}")
        return len(names)

    def get_initialization_summary(self, db: Session) -> dict:
        """Row counts per table, for the health endpoint."""
        tables = inspect(self.bind).get_table_names()
        counts = {}
        for model in (Author, Book, Format, Genre):
            if model.__tablename__ in tables:
                counts[model.__tablename__] = db.scalar(select(func.count()).select_from(model)) or 0
        return {
            "database": {
                "tables": sorted(tables),
                "row_counts": counts,
            },
            "forms": ["AuthorForm", "BookForm"],
        }
