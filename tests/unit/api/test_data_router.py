"""HTTP tests for /data."""

from bson import Binary, Decimal128, ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from src.book_catalog.entities.document import repository as document_repository
from tests.fixtures.mongo import FakeCollection


def test_empty_collection(client: TestClient):
    response = client.get("/data")

    assert response.status_code == 200
    assert response.json() == []


def test_raw_documents_returned(client: TestClient, documents_collection: FakeCollection):
    oid = ObjectId()
    documents_collection.documents.append({"_id": oid, "anything": ["goes", 1]})

    response = client.get("/data")

    assert response.status_code == 200
    assert response.json() == [{"_id": str(oid), "anything": ["goes", 1]}]


def test_bson_only_values_returned(
    client: TestClient, documents_collection: FakeCollection
):
    oid = ObjectId()
    documents_collection.documents.append(
        {"_id": oid, "price": Decimal128("9.99"), "blob": Binary(b"\xff\xfe\x00")}
    )

    response = client.get("/data")

    assert response.status_code == 200
    assert response.json() == [
        {
            "_id": str(oid),
            "price": {"$numberDecimal": "9.99"},
            "blob": {"$binary": {"base64": "//4A", "subType": "00"}},
        }
    ]


def test_reads_configured_collection_only(
    client: TestClient,
    documents_collection: FakeCollection,
    books_collection: FakeCollection,
):
    books_collection.documents.append({"_id": ObjectId(), "title": "Dune"})

    assert client.get("/data").json() == []


def test_store_failure(client: TestClient, documents_collection: FakeCollection):
    documents_collection.fail_with = ServerSelectionTimeoutError("no servers")

    response = client.get("/data")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


def test_unrenderable_document(
    client: TestClient, documents_collection: FakeCollection, monkeypatch
):
    def fail(document):
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    monkeypatch.setattr(document_repository, "to_jsonable", fail)
    documents_collection.documents.append({"_id": ObjectId()})

    response = client.get("/data")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}
