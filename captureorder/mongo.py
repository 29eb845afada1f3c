"""MongoDB helper functions for captureorder.

Orders land in one collection (`orders` by default). Two ways to connect:

- `MONGO_URI` set: use that connection string as-is (local Mongo, tests).
- Otherwise: Cosmos DB's Mongo API at `<DATABASE>.documents.azure.com:10255`
  over TLS, with the account name as both database and username.

`MongoClient` keeps its own connection pool and is safe to share between
request threads, so we create it once at startup.
"""

from __future__ import annotations

from typing import Any

from pymongo import MongoClient, errors

from .config import COSMOS_MONGO_PORT, Settings


def create_client(settings: Settings) -> MongoClient:
    """Build a MongoClient from settings.

    Raises:
        ConfigurationError if neither MONGO_URI nor DATABASE/PASSWORD are set.
    """
    settings.require_database()
    timeout_ms = int(settings.mongo_timeout_seconds * 1000)

    if settings.mongo_uri:
        return MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=timeout_ms)

    return MongoClient(
        host=f"{settings.database}.documents.azure.com",
        port=COSMOS_MONGO_PORT,
        username=settings.database,
        password=settings.password,
        authSource=settings.database,
        tls=True,
        # Cosmos DB does not support retryable writes.
        retryWrites=False,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
    )


def get_collection(settings: Settings, client: MongoClient | None = None):
    """Return the configured orders collection."""
    if client is None:
        client = create_client(settings)
    print(
        f"[Mongo] Using collection {settings.database_name()}.{settings.collection}"
    )
    return client[settings.database_name()][settings.collection]


def insert_order(collection, document: dict[str, Any]) -> str:
    """Insert an order document and return its id as a string.

    Raises:
        pymongo.errors.PyMongoError if the write fails. We log it here and let
        the caller decide what to tell the client.
    """
    try:
        result = collection.insert_one(document)
    except errors.PyMongoError as e:
        print(f"[Mongo] Insert failed: {e} order_id={document.get('id')}")
        raise

    order_id = str(result.inserted_id)
    print(f"[Mongo] Inserted order {order_id}")
    return order_id
