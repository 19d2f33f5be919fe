from functools import partial
from typing import Any, Self

from bson import (
    Binary,
    Code,
    DBRef,
    Decimal128,
    MaxKey,
    MinKey,
    ObjectId,
    Regex,
    Timestamp,
    json_util,
)
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field

# Keys a client may not choose; the store assigns identifiers.
RESERVED_KEYS = frozenset({"_id", "id"})

_extended_json = partial(json_util.default, json_options=json_util.RELAXED_JSON_OPTIONS)

# BSON types without a native JSON form render as relaxed Extended JSON.
BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: _extended_json,
    Binary: _extended_json,
    bytes: _extended_json,
    Timestamp: _extended_json,
    Regex: _extended_json,
    Code: _extended_json,
    DBRef: _extended_json,
    MinKey: _extended_json,
    MaxKey: _extended_json,
}


def to_jsonable(document: dict[str, Any]) -> dict[str, Any]:
    """Convert a raw MongoDB document into JSON-compatible values.

    ``ObjectId`` values, including ``_id``, become their hex strings. Other
    BSON-only values (``Decimal128``, binary data, timestamps, regexes)
    become relaxed Extended JSON objects such as ``{"$numberDecimal": "9.99"}``.
    """
    return jsonable_encoder(document, custom_encoder=BSON_ENCODERS)


class Payload(BaseModel):
    """Schema-flexible request body: declared fields are type-checked, the rest pass through."""

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Self:
        """Validate a client payload without coercing declared fields."""
        return cls.model_validate(payload, strict=True)

    def to_document(self) -> dict[str, Any]:
        """Fields as submitted, minus reserved identifier keys."""
        document = self.model_dump(exclude_unset=True)
        return {key: value for key, value in document.items() if key not in RESERVED_KEYS}


class Entity(Payload):
    """Base entity class whose identifier is assigned by the document store."""

    id: str = Field(description="Store-assigned unique identifier")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Build an entity from a stored document, exposing ``_id`` as ``id``."""
        body = to_jsonable({k: v for k, v in document.items() if k not in RESERVED_KEYS})
        return cls.model_validate({**body, "id": str(document["_id"])})
