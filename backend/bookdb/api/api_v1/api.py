from fastapi import APIRouter
from bookdb.api.api_v1 import author, books


api_router = APIRouter()

api_router.include_router(author.router, prefix="", tags=["authors"])
api_router.include_router(books.router, prefix="", tags=["books"])
