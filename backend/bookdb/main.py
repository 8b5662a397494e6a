import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookdb.core.database import SessionLocal
from bookdb.api.api_v1.api import api_router
from bookdb.initialization import ApplicationInitializer

# Initialize logger for uvicorn
uvicorn_logger = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    initializer = ApplicationInitializer()

    try:
        uvicorn_logger.info("🚀 Starting BookDB API initialization...")

        with SessionLocal() as db:
            uvicorn_logger.info("📊 Initializing database...")
            db_status = initializer.initialize_database(db)

            if db_status["database_ready"]:
                for table, count in db_status["seeded"].items():
                    if count:
                        uvicorn_logger.info(f"  • {table}: {count} default rows")
            else:
                uvicorn_logger.warning("⚠️ Database initialization incomplete")
                if "error" in db_status:
                    uvicorn_logger.error(f"❌ Error: {db_status['error']}")

            app.state.initialization_summary = initializer.get_initialization_summary(db)

        uvicorn_logger.info("🎉 BookDB API initialization completed! 🚀")

        yield

    except Exception as e:
        uvicorn_logger.error(f"🔥 Startup error: {e}")
        import traceback
        uvicorn_logger.error(f"Full traceback: {traceback.format_exc()}")
        raise

# FastAPI app setup
app = FastAPI(
    title="BookDB API",
    description="CRUD forms for a small library database, bound to SQLAlchemy models",
    version="0.4.0",
    lifespan=lifespan
)

# CORS Middleware Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API Router Setup
app.include_router(api_router, prefix="/api/v1")

@app.get("/")
def read_root():
    """Root endpoint with API information."""
    return {
        "message": "BookDB API is running!",
        "version": "0.4.0",
        "forms": ["authors", "books"],
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health")
def health_check():
    """Health check with table row counts."""
    try:
        with SessionLocal() as db:
            if hasattr(app.state, 'initialization_summary'):
                summary = app.state.initialization_summary
            else:
                summary = ApplicationInitializer().get_initialization_summary(db)

            return {
                "status": "healthy",
                "version": "0.4.0",
                "components": {
                    "database": summary.get("database", {}),
                },
                "forms": summary.get("forms", []),
            }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "version": "0.4.0"
        }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
