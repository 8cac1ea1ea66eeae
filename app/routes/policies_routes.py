"""
Policy routes.

This module defines the API endpoints that turn a dataset policy
configuration into IDS and ODRL documents, and that store and list
saved policies.

All endpoints delegate to the service layer
(`app.services.policies_service`).
"""

from typing import List
from fastapi import APIRouter
from app.schemas.policy import (
    GeneratePolicyRequest,
    GeneratedPolicyResponse,
    PolicyConfigRequest,
    PolicyTypeOption,
    SavePolicyRequest,
    SavedPolicyResponse,
)
from app.services.policies_service import (
    delete_policy,
    generate_policies,
    generate_policies_for_dataset,
    get_policies_by_dataset_id,
    get_policy_types,
    save_policy,
)

router = APIRouter()


@router.get("/types", response_model=List[PolicyTypeOption])
async def list_policy_types():
    """
    List the available policy types.

    Example:
        >>> GET /policies/types
    """

    return get_policy_types()


@router.post("/generate", response_model=GeneratedPolicyResponse)
async def generate_policy_route(data: GeneratePolicyRequest):
    """
    Generate the IDS and ODRL documents for a dataset given inline.

    Args:
        data (GeneratePolicyRequest): Dataset, policy configuration and an
            optional issue time for the ODRL agreement.

    Returns:
        GeneratedPolicyResponse: Both documents as JSON text.

    Example:
        >>> POST /policies/generate
        {
            "dataset": {"id": 1, "name": "Weather Dataset", "description": "", "uuid": "0f8f..."},
            "config": {"type": "usage_count", "maxUsageCount": 5}
        }
    """

    return generate_policies(data.dataset, data.config, data.issued)


@router.post("/generate/{dataset_id}", response_model=GeneratedPolicyResponse)
async def generate_policy_for_dataset_route(dataset_id: int, config: PolicyConfigRequest):
    """
    Generate the IDS and ODRL documents for a catalog dataset.

    Example:
        >>> POST /policies/generate/1
        {"type": "restrict_consumer", "consumers": ["consumer-001"]}
    """

    return await generate_policies_for_dataset(dataset_id, config)


@router.post("", status_code=201)
async def save_policy_route(data: SavePolicyRequest):
    """
    Save a dataset policy together with its generated documents.

    Returns:
        dict: Identifier of the saved policy.

    Example:
        >>> POST /policies
        {"dataset_id": 1, "config": {"type": "restrict_connector", "connectors": ["connector-001"]}}
    """

    policy_id = await save_policy(data)
    return {"message": "Policy saved", "id": policy_id}


@router.get("/by-dataset/{dataset_id}", response_model=List[SavedPolicyResponse])
async def list_policies_by_dataset(dataset_id: int):
    """
    Retrieve the saved policies of a dataset.

    Example:
        >>> GET /policies/by-dataset/1
    """

    return await get_policies_by_dataset_id(dataset_id)


@router.delete("/{policy_id}")
async def delete_policy_route(policy_id: str):
    """
    Delete a saved policy.

    Raises:
        HTTPException: 400 for a malformed id, 404 if the policy does not exist.

    Example:
        >>> DELETE /policies/665f1c2e9b1e8a3d4c2b1a00
    """

    await delete_policy(policy_id)
    return {"message": "Policy deleted successfully"}
