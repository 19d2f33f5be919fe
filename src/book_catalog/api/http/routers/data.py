"""Raw collection router."""

from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from starlette.responses import JSONResponse

from src.book_catalog.api.http.deps import get_document_repository
from src.book_catalog.core.errors import CatalogError
from src.book_catalog.entities.document import DocumentRepository

router = APIRouter(tags=["data"])


@router.get("/data", response_model=None)
async def list_documents(
    repository: DocumentRepository = Depends(get_document_repository),
) -> list[dict[str, Any]] | JSONResponse:
    """Return every document of the configured collection as stored."""
    try:
        return await repository.list_all()
    except CatalogError:
        logger.exception("Failed to query documents")
        return JSONResponse(
            status_code=500, content={"message": "Internal Server Error"}
        )
