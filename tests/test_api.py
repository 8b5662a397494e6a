"""Tests for the HTTP layer."""

import pytest
from fastapi.testclient import TestClient

from bookdb.core.database import get_db
from bookdb.crud import author as author_crud
from bookdb.crud import book as book_crud
from bookdb.main import app


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_author_controller_index(client):
    response = client.get("/api/v1/author")
    assert response.status_code == 200
    assert response.json() == {"message": "Matched bookdb author controller in Author."}


def test_new_book_form(client, library):
    response = client.get("/api/v1/books/form")
    assert response.status_code == 200
    data = response.json()
    assert data["form"] == "BookForm"
    assert data["item_id"] is None

    fields = {f["name"]: f for f in data["fields"]}
    assert fields["title"]["required"] is True
    assert fields["genres"]["type"] == "Multiple"
    assert [o["label"] for o in fields["format"]["options"]] == ["Hardcover", "Paperback"]


def test_edit_book_form(client, library):
    emma = library["emma"]
    response = client.get(f"/api/v1/books/{emma.id}/form")
    assert response.status_code == 200
    fields = {f["name"]: f for f in response.json()["fields"]}
    assert fields["title"]["value"] == "Emma"
    assert fields["author"]["value"] == library["austen"].id


def test_missing_book(client, library):
    assert client.get("/api/v1/books/999/form").status_code == 404
    assert client.post("/api/v1/books/999/form", json={"title": "x"}).status_code == 404


def test_create_book(client, db, book_params, library):
    response = client.post("/api/v1/books/form", json=book_params)
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["disposition"] == "created"

    book = book_crud.get(db, data["item_id"])
    assert book.title == "Persuasion"
    assert book_crud.genre_ids(db, book.id) == {library["fiction"].id, library["romance"].id}


def test_update_book(client, db, library):
    emma = library["emma"]
    params = {
        "title": "Emma",
        "author": str(library["austen"].id),
        "isbn": "111",
        "genres": [str(library["satire"].id)],
    }
    data = client.post(f"/api/v1/books/{emma.id}/form", json=params).json()
    assert data["ok"] is True
    assert data["disposition"] == "updated"
    assert book_crud.genre_ids(db, emma.id) == {library["satire"].id}


def test_invalid_submission(client, library):
    data = client.post("/api/v1/books/form", json={"title": "", "isbn": "111"}).json()
    assert data["ok"] is False
    assert data["disposition"] is None
    assert data["field_errors"] == {
        "title": ["This field is required"],
        "author": ["This field is required"],
    }
    assert data["form_errors"] == ["Please correct the errors below"]


def test_author_form_round_trip(client, db):
    data = client.post("/api/v1/authors/form", json={"name": "George Eliot", "country": "England"}).json()
    assert data["ok"] is True

    author = author_crud.get_by_name(db, "George Eliot")
    assert author is not None and author.id == data["item_id"]

    fields = {f["name"]: f for f in client.get(f"/api/v1/authors/{author.id}/form").json()["fields"]}
    assert fields["country"]["value"] == "England"
    assert fields["is_active"]["value"] is False

    data = client.post(f"/api/v1/authors/{author.id}/form", json={"name": "George Eliot", "is_active": True}).json()
    assert data["disposition"] == "updated"
    db.refresh(author)
    assert author.is_active is True
    assert author.country is None
