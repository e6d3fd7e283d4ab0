import logging
from typing import Any, Iterator, Mapping, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure
from pymongo.results import InsertOneResult

from app.config import settings
from app.core.exceptions import ConfigException, DatabaseUnavailableException

logger = logging.getLogger(__name__)


# ── Gateway ───────────────────────────────────────────────────────────────────
class MongoGateway:
    """
    Per-request handle on the document store.

    Connects lazily on first use, so requests rejected before they reach the
    database (rate limit, size, validation) never open a connection.
    Every call is bounded by `timeout_ms`; a timeout or lost connection is
    raised as DatabaseUnavailableException (503) for the caller to retry.

    No transactions are used. Duplicate-email and singleton checks are
    read-then-write and can race under concurrent requests.
    """

    def __init__(self, url: Optional[str], database_name: Optional[str], timeout_ms: int = 5000):
        self._url = url
        self._database_name = database_name
        self._timeout_ms = timeout_ms
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    def connect(self) -> Database:
        if self._db is not None:
            return self._db
        if not self._url or not self._database_name:
            logger.error("MongoDB connection string or database name is not configured")
            raise ConfigException()
        self._client = MongoClient(
            self._url,
            serverSelectionTimeoutMS=self._timeout_ms,
            connectTimeoutMS=self._timeout_ms,
            socketTimeoutMS=self._timeout_ms,
        )
        self._db = self._client[self._database_name]
        return self._db

    def _collection(self, name: Optional[str]) -> Collection:
        if not name:
            logger.error("MongoDB collection name is not configured")
            raise ConfigException()
        return self.connect()[name]

    def find_one(self, collection: Optional[str], filter: Mapping[str, Any]) -> Optional[dict]:
        try:
            return self._collection(collection).find_one(filter)
        except ConnectionFailure as exc:
            logger.error(f"MongoDB find_one on {collection} failed: {type(exc).__name__}")
            raise DatabaseUnavailableException() from exc

    def insert_one(self, collection: Optional[str], document: dict) -> InsertOneResult:
        try:
            return self._collection(collection).insert_one(document)
        except ConnectionFailure as exc:
            logger.error(f"MongoDB insert_one on {collection} failed: {type(exc).__name__}")
            raise DatabaseUnavailableException() from exc

    def count_documents(self, collection: Optional[str], filter: Optional[Mapping[str, Any]] = None) -> int:
        try:
            return self._collection(collection).count_documents(filter or {})
        except ConnectionFailure as exc:
            logger.error(f"MongoDB count_documents on {collection} failed: {type(exc).__name__}")
            raise DatabaseUnavailableException() from exc

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


# ── Dependency ────────────────────────────────────────────────────────────────
def get_gateway() -> Iterator[MongoGateway]:
    """
    FastAPI dependency that yields a gateway and guarantees cleanup.
    Use as: gateway: MongoGateway = Depends(get_gateway)
    The connection is closed even if an exception is raised inside the endpoint.
    """
    gateway = MongoGateway(settings.mongo_login, settings.mongo_database, settings.mongo_timeout_ms)
    try:
        yield gateway
    finally:
        gateway.close()
