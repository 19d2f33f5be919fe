"""Book API router: list and append."""

from fastapi import APIRouter, Depends, Request
from loguru import logger
from pydantic import ValidationError
from starlette.responses import PlainTextResponse

from src.book_catalog.api.http.deps import get_book_repository
from src.book_catalog.core.errors import CatalogError, InvalidBookError
from src.book_catalog.entities.book import Book, BookCreate, BookRepository

router = APIRouter(tags=["books"])

FETCH_ERROR = "Error fetching books"
SAVE_ERROR = "Error saving book"


async def read_book_payload(request: Request) -> BookCreate:
    """Parse the request body into a BookCreate.

    Raises:
        InvalidBookError: If the body is not a JSON object or a declared
            field has the wrong type. Declared fields are not coerced, so
            "1965", 1965.0 and true are all rejected for publishedYear.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidBookError("Request body is not valid JSON") from e

    if not isinstance(payload, dict):
        raise InvalidBookError("Request body must be a JSON object")

    try:
        return BookCreate.from_payload(payload)
    except ValidationError as e:
        raise InvalidBookError(str(e)) from e


@router.get(
    "/books",
    response_model=list[Book],
    response_model_exclude_unset=True,
    responses={500: {"content": {"text/plain": {}}, "description": FETCH_ERROR}},
)
async def list_books(
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book] | PlainTextResponse:
    """List all books."""
    try:
        return await repository.list_all()
    except CatalogError:
        logger.exception("Failed to list books")
        return PlainTextResponse(FETCH_ERROR, status_code=500)


@router.post(
    "/books",
    response_model=Book,
    response_model_exclude_unset=True,
    responses={500: {"content": {"text/plain": {}}, "description": SAVE_ERROR}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": BookCreate.model_json_schema()}
            },
        }
    },
)
async def create_book(
    request: Request,
    repository: BookRepository = Depends(get_book_repository),
) -> Book | PlainTextResponse:
    """Append a new book and return it with its assigned id."""
    try:
        book = await read_book_payload(request)
        created = await repository.create(book)
    except CatalogError:
        logger.exception("Failed to save book")
        return PlainTextResponse(SAVE_ERROR, status_code=500)

    logger.info("Saved book {}", created.id)
    return created
