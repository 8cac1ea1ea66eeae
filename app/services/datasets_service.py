"""
Datasets service.

This module ingests the provider catalog into `Dataset` models. Catalog
records are read from the `resources` collection; every record without
an identifier is given one, and the new identifier is written back so
the URIs generated for the dataset stay stable across requests.

Handled responsibilities:
    - Conversion of catalog records into datasets
    - Identifier assignment on first ingestion
    - Dataset retrieval by catalog id
"""

from typing import Optional
from fastapi import HTTPException
from app.db.client import get_db
from app.models.dataset import Dataset
from app.util.id_generator import generate_uuid


def convert_to_datasets(resources: list) -> list[Dataset]:
    """
    Converts catalog records into datasets, assigning missing identifiers.

    Args:
        resources (list): Records with `id`, `name`, `description` and an
            optional `uuid`.

    Returns:
        list[Dataset]: Datasets in catalog order.
    """

    return [
        Dataset(
            id=resource["id"],
            name=resource["name"],
            description=resource.get("description", ""),
            uuid=resource.get("uuid") or generate_uuid(),
        )
        for resource in resources
    ]


async def _ingest(resources: list) -> list[Dataset]:
    datasets = convert_to_datasets(resources)

    db = get_db()
    for resource, dataset in zip(resources, datasets):
        if resource.get("uuid"):
            continue
        # Only set while missing, null or empty so concurrent ingestions keep the first value.
        result = await db["resources"].update_one(
            {"id": dataset.id, "uuid": {"$in": [None, ""]}},
            {"$set": {"uuid": dataset.uuid}}
        )
        if result.modified_count == 0:
            stored = await db["resources"].find_one({"id": dataset.id})
            if stored and stored.get("uuid"):
                dataset.uuid = stored["uuid"]

    return datasets


async def get_datasets() -> list[Dataset]:
    """
    Retrieves the whole catalog as datasets.

    Returns:
        list[Dataset]: Every catalog entry, each with its identifier.
    """

    db = get_db()
    resources = await db["resources"].find({}, {"_id": 0}).to_list(length=None)
    return await _ingest(resources)


async def get_dataset_by_id(dataset_id: int) -> Dataset:
    """
    Retrieves one dataset of the catalog.

    Args:
        dataset_id (int): Catalog identifier.

    Raises:
        HTTPException: 404 if no catalog entry has this id.

    Returns:
        Dataset: The ingested dataset.
    """

    db = get_db()
    resource: Optional[dict] = await db["resources"].find_one({"id": dataset_id}, {"_id": 0})
    if not resource:
        raise HTTPException(status_code=404, detail="Dataset not found")

    datasets = await _ingest([resource])
    return datasets[0]
