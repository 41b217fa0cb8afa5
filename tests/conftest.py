"""Shared fixtures: mongomock collections behind the asyncio collection API."""

import mongomock
import pytest

from insert_books import sample_books


class AsyncCursorAdapter:
    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, *args, **kwargs):
        self._cursor = self._cursor.sort(*args, **kwargs)
        return self

    def skip(self, count):
        self._cursor = self._cursor.skip(count)
        return self

    def limit(self, count):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs if length is None else docs[:length]


class AsyncCollectionAdapter:
    """Exposes a mongomock collection with awaitable methods like AsyncCollection."""

    def __init__(self, collection):
        self.sync = collection

    @property
    def name(self):
        return self.sync.name

    @property
    def database(self):
        return self.sync.database

    def find(self, *args, **kwargs):
        return AsyncCursorAdapter(self.sync.find(*args, **kwargs))

    async def find_one(self, *args, **kwargs):
        return self.sync.find_one(*args, **kwargs)

    async def update_one(self, *args, **kwargs):
        return self.sync.update_one(*args, **kwargs)

    async def delete_one(self, *args, **kwargs):
        return self.sync.delete_one(*args, **kwargs)

    async def delete_many(self, *args, **kwargs):
        return self.sync.delete_many(*args, **kwargs)

    async def insert_many(self, *args, **kwargs):
        return self.sync.insert_many(*args, **kwargs)

    async def aggregate(self, pipeline, **kwargs):
        return AsyncCursorAdapter(self.sync.aggregate(pipeline, **kwargs))

    async def create_index(self, keys, **kwargs):
        return self.sync.create_index(keys, **kwargs)


@pytest.fixture
def empty_books():
    client = mongomock.MongoClient()
    return AsyncCollectionAdapter(client["plp_bookstore"]["books"])


@pytest.fixture
def books(empty_books):
    empty_books.sync.insert_many(sample_books())
    return empty_books


@pytest.fixture
def recorder():
    """Result sink that keeps ``(title, result)`` pairs in call order."""
    calls = []

    def emit(title, result):
        calls.append((title, result))

    emit.calls = calls
    return emit
