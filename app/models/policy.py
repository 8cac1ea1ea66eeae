"""
Policy model definition.

This module defines the in-memory representation of the usage policy a
provider configures for a dataset. The configuration is a tagged
variant: `type` selects one of four restrictions and only the fields
relevant to that restriction are read by the policy compilers.

- PolicyType: the active restriction.
- PolicyConfig: the restriction together with its parameters.
- SavedPolicy: a configuration stored with the documents generated from it.

Note:
    Consumer and connector restrictions accept several identifiers, but
    only the first one is encoded in the generated documents. Selecting
    more than one is advisory only.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.dataset import Dataset


class PolicyType(str, Enum):
    RESTRICT_CONSUMER = "restrict_consumer"
    RESTRICT_CONNECTOR = "restrict_connector"
    TIME_LIMIT = "time_limit"
    USAGE_COUNT = "usage_count"


POLICY_TYPE_OPTIONS = [
    {"value": PolicyType.RESTRICT_CONSUMER.value, "label": "Restrict consumer"},
    {"value": PolicyType.RESTRICT_CONNECTOR.value, "label": "Restrict connector"},
    {"value": PolicyType.TIME_LIMIT.value, "label": "Limit usage time"},
    {"value": PolicyType.USAGE_COUNT.value, "label": "Limit usage count"},
]


class PolicyConfig(BaseModel):
    """
    Policy configuration for a single dataset.

    Switching `type` does not clear the parameters of the previous
    restriction; they are simply ignored.

    Example:
        >>> config = PolicyConfig(
        ...     type="time_limit",
        ...     startTime="2024-01-01T00:00",
        ...     endTime="2024-06-01T00:00"
        ... )
        >>> print(config.type.value)
        time_limit
    """

    type: PolicyType = PolicyType.RESTRICT_CONSUMER
    """Active restriction."""

    consumers: List[str] = Field(default_factory=list)
    """Allowed consumers. Only the first entry is encoded."""

    connectors: List[str] = Field(default_factory=list)
    """Allowed connectors. Only the first entry is encoded."""

    startTime: str = ""
    """Start of the usage window, passed through verbatim."""

    endTime: str = ""
    """End of the usage window, passed through verbatim."""

    maxUsageCount: Optional[int] = 1
    """Maximum number of uses."""


class SavedPolicy(BaseModel):
    """
    A policy configuration stored together with its generated documents.
    """

    dataset: Dataset
    config: PolicyConfig
    idsPolicy: str
    odrlPolicy: str
    created_at: datetime
