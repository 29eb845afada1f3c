import pytest
from pymongo import errors

from captureorder.config import Settings


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    """Just enough of a pymongo collection for insert_one."""

    def __init__(self, fail: bool = False):
        self.docs = []
        self.fail = fail

    def insert_one(self, doc):
        if self.fail:
            raise errors.ServerSelectionTimeoutError("no servers")
        self.docs.append(doc)
        return InsertResult(doc["_id"])


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://localhost:27017/orders", source="aks")


@pytest.fixture
def failing_collection():
    return FakeCollection(fail=True)
