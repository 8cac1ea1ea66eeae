import pytest
from unittest.mock import AsyncMock, MagicMock

from app.models.dataset import Dataset


@pytest.fixture
def dataset():
    return Dataset(
        id=1,
        name="Weather Dataset",
        description="Hourly weather observations",
        uuid="0f8fad5b-d9cb-469f-a165-70867728950e",
    )


def make_collection(find_one=None, documents=None, modified_count=1, deleted_count=1):
    """Motor collection stand-in with awaitable CRUD methods."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=find_one)
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=modified_count))
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id="665f1c2e9b1e8a3d4c2b1a00"))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=deleted_count))

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    collection.find.return_value = cursor
    return collection


def make_db(**collections):
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    return db
