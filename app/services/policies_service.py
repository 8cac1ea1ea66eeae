"""
Policies service.

This module generates the IDS and ODRL documents for a dataset policy
and stores saved policies in MongoDB.

Handled responsibilities:
    - Rendering both policy documents for a configuration
    - Saving a configuration together with its documents
    - Retrieval of saved policies by dataset
    - Deletion of saved policies
"""

from datetime import datetime, timezone
from typing import Optional
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from app.db.client import get_db
from app.models.dataset import Dataset
from app.models.policy import POLICY_TYPE_OPTIONS, PolicyConfig, SavedPolicy
from app.schemas.policy import GeneratedPolicyResponse, PolicyTypeOption, SavePolicyRequest, SavedPolicyResponse
from app.services.datasets_service import get_dataset_by_id
from app.services.policy_compiler import generate_ids_policy, generate_odrl_policy


def get_policy_types() -> list[PolicyTypeOption]:
    return [PolicyTypeOption(**option) for option in POLICY_TYPE_OPTIONS]


def generate_policies(dataset: Dataset, config: PolicyConfig, issued: Optional[datetime] = None) -> GeneratedPolicyResponse:
    """
    Renders the IDS and ODRL documents for a dataset policy.

    Both documents are computed independently from the same inputs.

    Args:
        dataset (Dataset): Dataset the policy applies to.
        config (PolicyConfig): Policy configuration.
        issued (datetime, optional): Issue time of the ODRL agreement.
            Defaults to now.

    Returns:
        GeneratedPolicyResponse: Both documents as pretty-printed JSON text.
    """

    return GeneratedPolicyResponse(
        idsPolicy=generate_ids_policy(dataset, config),
        odrlPolicy=generate_odrl_policy(dataset, config, issued),
    )


async def generate_policies_for_dataset(dataset_id: int, config: PolicyConfig) -> GeneratedPolicyResponse:
    """
    Renders both documents for a catalog dataset.

    Raises:
        HTTPException: 404 if the dataset is not in the catalog.
    """

    dataset = await get_dataset_by_id(dataset_id)
    return generate_policies(dataset, config)


async def save_policy(data: SavePolicyRequest) -> str:
    """
    Saves a dataset policy together with its generated documents.

    Args:
        data (SavePolicyRequest): Catalog id of the dataset and the
            policy configuration.

    Raises:
        HTTPException: 404 if the dataset is unknown, 500 if the policy
            cannot be stored.

    Returns:
        str: MongoDB id of the saved policy.
    """

    dataset = await get_dataset_by_id(data.dataset_id)
    config = PolicyConfig(**data.config.model_dump())
    documents = generate_policies(dataset, config)

    saved = SavedPolicy(
        dataset=dataset,
        config=config,
        idsPolicy=documents.idsPolicy,
        odrlPolicy=documents.odrlPolicy,
        created_at=datetime.now(timezone.utc),
    )

    db = get_db()
    try:
        result = await db["policies"].insert_one(saved.model_dump(mode="json"))
    except Exception as e:
        print(f"❌ [ERROR] Failed to save policy for dataset {dataset.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save policy: {str(e)}")

    print(f"✅ Policy saved for dataset {dataset.id} ({config.type.value})")
    return str(result.inserted_id)


def _to_response(document: dict) -> SavedPolicyResponse:
    return SavedPolicyResponse(
        id=str(document["_id"]),
        dataset=document["dataset"],
        config=document["config"],
        idsPolicy=document["idsPolicy"],
        odrlPolicy=document["odrlPolicy"],
        created_at=document["created_at"],
    )


async def get_policies_by_dataset_id(dataset_id: int) -> list[SavedPolicyResponse]:
    """
    Retrieves the saved policies of a dataset, oldest first.

    Args:
        dataset_id (int): Catalog identifier of the dataset.

    Returns:
        list[SavedPolicyResponse]: Saved policies of the dataset.
    """

    db = get_db()
    documents = await db["policies"].find({"dataset.id": dataset_id}).sort("created_at", 1).to_list(length=None)
    return [_to_response(document) for document in documents]


async def delete_policy(policy_id: str) -> bool:
    """
    Deletes a saved policy.

    Args:
        policy_id (str): MongoDB id of the saved policy.

    Raises:
        HTTPException: 400 if the id is malformed, 404 if no policy was deleted.

    Returns:
        bool: True once the policy is deleted.
    """

    try:
        object_id = ObjectId(policy_id)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid policy id")

    db = get_db()
    result = await db["policies"].delete_one({"_id": object_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Policy not found")
    return True
