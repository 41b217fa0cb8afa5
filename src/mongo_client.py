import os
from typing import Optional

from dotenv import load_dotenv
from pymongo import AsyncMongoClient
import certifi

load_dotenv()

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DBNAME = os.getenv("MONGODB_DBNAME", "plp_bookstore")
MONGODB_COLLECTION = os.getenv("MONGODB_COLLECTION", "books")


def _wants_tls(uri: str) -> bool:
    uri = uri.lower()
    return uri.startswith("mongodb+srv://") or "tls=true" in uri or "ssl=true" in uri


def get_client(uri: Optional[str] = None) -> AsyncMongoClient:
    uri = uri or MONGODB_URI
    options = {"serverSelectionTimeoutMS": 30000}
    # tlsCAFile implies tls=True, so a plain local URI must not get it
    if _wants_tls(uri):
        options["tlsCAFile"] = certifi.where()
    return AsyncMongoClient(uri, **options)


def get_books(client: AsyncMongoClient):
    return client[MONGODB_DBNAME][MONGODB_COLLECTION]
