"""
Policy schemas.

Request and response bodies of the policy endpoints. Requests carry the
raw values entered in the policy form; `PolicyConfigRequest` applies the
form-level usage count coercion before a configuration reaches the
compilers.
"""

import math
import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator

from app.models.dataset import Dataset
from app.models.policy import PolicyConfig

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_usage_count(raw) -> int:
    """
    Parses a raw usage count, falling back to 1.

    Leading digits are parsed (``"5 uses"`` gives 5). Non-numeric, infinite,
    NaN, zero and negative values give 1.

    Example:
        >>> coerce_usage_count("abc")
        1
        >>> coerce_usage_count("12")
        12
    """

    if isinstance(raw, bool) or raw is None:
        return 1
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return 1
        value = int(raw)
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return 1
        value = int(match.group(1))
    return value if value > 0 else 1


class PolicyConfigRequest(PolicyConfig):
    """Policy configuration as submitted by the policy form."""

    @field_validator("maxUsageCount", mode="before")
    @classmethod
    def normalize_usage_count(cls, v):
        return coerce_usage_count(v)


class GeneratePolicyRequest(BaseModel):
    dataset: Dataset
    config: PolicyConfigRequest
    issued: Optional[datetime] = None


class GeneratedPolicyResponse(BaseModel):
    idsPolicy: str
    odrlPolicy: str


class SavePolicyRequest(BaseModel):
    dataset_id: int
    config: PolicyConfigRequest


class SavedPolicyResponse(BaseModel):
    id: str  # MongoDB _id as string
    dataset: Dataset
    config: PolicyConfig
    idsPolicy: str
    odrlPolicy: str
    created_at: datetime


class PolicyTypeOption(BaseModel):
    value: str
    label: str
