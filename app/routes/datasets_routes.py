"""
Dataset routes.

This module exposes the provider catalog as datasets a policy can be
configured for. Each dataset carries the identifier used in the URIs of
its generated policy documents.
"""

from typing import List
from fastapi import APIRouter
from app.models.dataset import Dataset
from app.services.datasets_service import get_dataset_by_id, get_datasets

router = APIRouter()


@router.get("", response_model=List[Dataset])
async def list_datasets():
    """
    Retrieve every dataset of the catalog.

    Returns:
        List[Dataset]: Catalog datasets, each with its `uuid`.

    Example:
        >>> GET /datasets
    """

    return await get_datasets()


@router.get("/{dataset_id}", response_model=Dataset)
async def get_dataset(dataset_id: int):
    """
    Retrieve a single dataset by catalog id.

    Raises:
        HTTPException: 404 if the dataset does not exist.

    Example:
        >>> GET /datasets/1
    """

    return await get_dataset_by_id(dataset_id)
