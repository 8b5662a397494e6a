# bookdb/api/api_v1/books.py
from typing import Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from bookdb.api.api_v1.form_views import form_response, submit_response
from bookdb.core.database import get_db
from bookdb.crud import book as book_crud
from bookdb.crud import submit_form
from bookdb.forms import BookForm
from bookdb.schemas.form import FormResponse, FormSubmitResponse, FormValue

router = APIRouter()


def _get_book_or_404(db: Session, book_id: int):
    book = book_crud.get(db, book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.get("/books/form", response_model=FormResponse)
def new_book_form(db: Session = Depends(get_db)):
    """Empty book form with select list options."""
    return form_response(BookForm(db))


@router.get("/books/{book_id}/form", response_model=FormResponse)
def edit_book_form(book_id: int, db: Session = Depends(get_db)):
    """Book form filled with the stored values."""
    return form_response(BookForm(db, item=_get_book_or_404(db, book_id)))


@router.post("/books/form", response_model=FormSubmitResponse)
def create_book(params: Dict[str, FormValue] = Body(...), db: Session = Depends(get_db)):
    form = BookForm(db)
    return submit_response(form, submit_form(db, form, params))


@router.post("/books/{book_id}/form", response_model=FormSubmitResponse)
def update_book(book_id: int, params: Dict[str, FormValue] = Body(...), db: Session = Depends(get_db)):
    form = BookForm(db, item=_get_book_or_404(db, book_id))
    return submit_response(form, submit_form(db, form, params))
