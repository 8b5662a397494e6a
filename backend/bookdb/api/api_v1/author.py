# bookdb/api/api_v1/author.py
from typing import Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from bookdb.api.api_v1.form_views import form_response, submit_response
from bookdb.core.database import get_db
from bookdb.crud import author as author_crud
from bookdb.crud import submit_form
from bookdb.forms import AuthorForm
from bookdb.schemas.form import FormResponse, FormSubmitResponse, FormValue

router = APIRouter()


@router.get("/author")
def index():
    """Author controller index."""
    return {"message": "Matched bookdb author controller in Author."}


@router.get("/authors/form", response_model=FormResponse)
def new_author_form(db: Session = Depends(get_db)):
    return form_response(AuthorForm(db))


@router.get("/authors/{author_id}/form", response_model=FormResponse)
def edit_author_form(author_id: int, db: Session = Depends(get_db)):
    author = author_crud.get(db, author_id)
    if not author:
        raise HTTPException(status_code=404, detail="Author not found")
    return form_response(AuthorForm(db, item=author))


@router.post("/authors/form", response_model=FormSubmitResponse)
def create_author(params: Dict[str, FormValue] = Body(...), db: Session = Depends(get_db)):
    form = AuthorForm(db)
    return submit_response(form, submit_form(db, form, params))


@router.post("/authors/{author_id}/form", response_model=FormSubmitResponse)
def update_author(author_id: int, params: Dict[str, FormValue] = Body(...), db: Session = Depends(get_db)):
    author = author_crud.get(db, author_id)
    if not author:
        raise HTTPException(status_code=404, detail="Author not found")
    form = AuthorForm(db, item=author)
    return submit_response(form, submit_form(db, form, params))
