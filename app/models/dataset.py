"""
Dataset model definition.

This module defines the `Dataset` data model used to represent the
catalog entries a provider can attach a usage policy to. Catalog
records are supplied by the resource catalog (`id`, `name`,
`description`); the `uuid` is assigned once on ingestion and used as the
stable suffix of every URI generated for the dataset.
"""

from pydantic import BaseModel


class Dataset(BaseModel):
    """
    Represents a dataset of the provider catalog.

    Example:
        >>> dataset = Dataset(
        ...     id=1,
        ...     name="Weather Dataset",
        ...     description="Hourly weather observations",
        ...     uuid="0f8fad5b-d9cb-469f-a165-70867728950e"
        ... )
        >>> print(dataset.uuid)
        0f8fad5b-d9cb-469f-a165-70867728950e
    """

    id: int
    """Provider-assigned catalog identifier."""

    name: str
    """Human-readable name of the dataset."""

    description: str = ""
    """Short description shown next to the name."""

    uuid: str
    """Identifier assigned on ingestion; never changes afterwards."""
