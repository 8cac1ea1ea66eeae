"""
Policy compiler.

This module renders a dataset and its policy configuration into two
independent JSON-LD policy documents:

    - an IDS (International Data Spaces) `ContractAgreement`
    - a W3C ODRL `Agreement`

Both compilers build a new document on every call from the same inputs.
Each restriction contributes either a constraint list for the single
permission or an override of the consumer/assignee party; those
fragments are produced by one builder per vocabulary and spliced into
the base document.

Only the first consumer and the first connector of a configuration are
encoded. Empty parameters leave the base document unconstrained.
"""

import json
from datetime import datetime, timezone
from typing import Optional

from app.models.dataset import Dataset
from app.models.policy import PolicyConfig, PolicyType

IDS_CONTEXT = {
    "ids": "https://w3id.org/idsa/core/",
    "idsc": "https://w3id.org/idsa/code/",
}

ODRL_CONTEXT = [
    "http://www.w3.org/ns/odrl.jsonld",
    {
        "dc": "http://purl.org/dc/terms/",
        "ids": "https://w3id.org/idsa/core/",
        "idsc": "https://w3id.org/idsa/code/",
    },
]

IDS_CONTRACT_BASE = "https://w3id.org/idsa/autogen/contract/"
IDS_TARGET_BASE = "http://example.com/ids/target/"
IDS_PROFILE = "http://example.com/ids-profile"
IDS_PROVIDER = "http://example.com/party/data-provider"
IDS_CONSUMER = "http://example.com/party/data-consumer"

ODRL_POLICY_BASE = "http://example.com/policy/"
ODRL_TARGET_BASE = "http://example.com/ids/data/"
ODRL_PROFILE = "http://www.w3.org/ns/odrl/2/core"
ODRL_CREATOR = "Data Provider"
ODRL_ASSIGNER = "http://example.com/ids/party/data-provider"
ODRL_ASSIGNEE = "http://example.com/ids/party/data-consumer"


def _has_time_window(config: PolicyConfig) -> bool:
    return bool(config.startTime and config.endTime)


# ------------------------------------------------------------------------------
# IDS
# ------------------------------------------------------------------------------

def _ids_constraint(left_operand: str, operator: str, value: str, datatype: str) -> dict:
    return {
        "@type": "ids:Constraint",
        "ids:leftOperand": {"@id": left_operand},
        "ids:operator": {"@id": operator},
        "ids:rightOperand": [{
            "@value": value,
            "@type": datatype,
        }],
    }


def _ids_constraints(config: PolicyConfig) -> Optional[list]:
    """
    Builds the IDS constraint list for the active restriction.

    Args:
        config (PolicyConfig): Policy configuration.

    Returns:
        list | None: Constraints for the permission, or None when the
        restriction adds no constraint.
    """

    if config.type == PolicyType.RESTRICT_CONNECTOR:
        if config.connectors:
            return [_ids_constraint("idsc:CONNECTOR", "idsc:EQUALS", config.connectors[0], "xsd:string")]

    elif config.type == PolicyType.TIME_LIMIT:
        if _has_time_window(config):
            return [
                _ids_constraint("idsc:POLICY_EVALUATION_TIME", "idsc:AFTER", config.startTime, "xsd:dateTimeStamp"),
                _ids_constraint("idsc:POLICY_EVALUATION_TIME", "idsc:BEFORE", config.endTime, "xsd:dateTimeStamp"),
            ]

    elif config.type == PolicyType.USAGE_COUNT:
        if config.maxUsageCount:
            return [_ids_constraint("idsc:COUNT", "idsc:LTEQ", str(config.maxUsageCount), "xsd:double")]

    return None


def compile_ids(dataset: Dataset, config: PolicyConfig) -> dict:
    """
    Compiles an IDS `ContractAgreement` for a dataset.

    Args:
        dataset (Dataset): Dataset the agreement targets.
        config (PolicyConfig): Policy configuration.

    Returns:
        dict: JSON-LD contract agreement.

    Example:
        >>> doc = compile_ids(dataset, PolicyConfig(type="usage_count", maxUsageCount=5))
        >>> doc["ids:permission"][0]["ids:constraint"][0]["ids:rightOperand"]
        [{'@value': '5', '@type': 'xsd:double'}]
    """

    consumer = IDS_CONSUMER
    if config.type == PolicyType.RESTRICT_CONSUMER and config.consumers:
        consumer = config.consumers[0]

    permission = {
        "ids:target": {"@id": f"{IDS_TARGET_BASE}{dataset.uuid}"},
        "ids:action": [{"@id": "idsc:USE"}],
    }
    constraints = _ids_constraints(config)
    if constraints:
        permission["ids:constraint"] = constraints

    return {
        "@context": dict(IDS_CONTEXT),
        "@type": "ids:ContractAgreement",
        "@id": f"{IDS_CONTRACT_BASE}{dataset.uuid}",
        "profile": IDS_PROFILE,
        "ids:provider": IDS_PROVIDER,
        "ids:consumer": consumer,
        "ids:permission": [permission],
    }


# ------------------------------------------------------------------------------
# ODRL
# ------------------------------------------------------------------------------

def _odrl_constraint(left_operand: str, operator: str, right_operand) -> dict:
    return {
        "leftOperand": left_operand,
        "operator": operator,
        "rightOperand": right_operand,
    }


def _odrl_constraints(config: PolicyConfig) -> Optional[list]:
    """
    Builds the ODRL constraint list for the active restriction.

    Args:
        config (PolicyConfig): Policy configuration.

    Returns:
        list | None: Constraints for the permission, or None when the
        restriction adds no constraint.
    """

    if config.type == PolicyType.RESTRICT_CONNECTOR:
        if config.connectors:
            return [_odrl_constraint("connector", "eq", config.connectors[0])]

    elif config.type == PolicyType.TIME_LIMIT:
        if _has_time_window(config):
            return [
                _odrl_constraint("dateTime", "gteq", {"@value": config.startTime, "@type": "xsd:dateTime"}),
                _odrl_constraint("dateTime", "lteq", {"@value": config.endTime, "@type": "xsd:dateTime"}),
            ]

    elif config.type == PolicyType.USAGE_COUNT:
        if config.maxUsageCount:
            return [_odrl_constraint("count", "lteq", config.maxUsageCount)]

    return None


def format_issued(moment: datetime) -> str:
    """
    Formats a timestamp as UTC ISO-8601 with millisecond precision.

    Naive datetimes are taken to be UTC.

    Example:
        >>> format_issued(datetime(2024, 1, 1, tzinfo=timezone.utc))
        '2024-01-01T00:00:00.000Z'
    """

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def compile_odrl(dataset: Dataset, config: PolicyConfig, issued: Optional[datetime] = None) -> dict:
    """
    Compiles an ODRL `Agreement` for a dataset.

    Args:
        dataset (Dataset): Dataset the agreement targets.
        config (PolicyConfig): Policy configuration.
        issued (datetime, optional): Value of `dc:issued`. Defaults to
            the current time, which makes repeated calls differ only in
            this field.

    Returns:
        dict: JSON-LD agreement.
    """

    if issued is None:
        issued = datetime.now(timezone.utc)

    assignee = ODRL_ASSIGNEE
    if config.type == PolicyType.RESTRICT_CONSUMER and config.consumers:
        assignee = config.consumers[0]

    permission = {
        "target": f"{ODRL_TARGET_BASE}{dataset.uuid}",
        "assigner": ODRL_ASSIGNER,
        "assignee": assignee,
        "action": "use",
    }
    constraints = _odrl_constraints(config)
    if constraints:
        permission["constraint"] = constraints

    return {
        "@context": [ODRL_CONTEXT[0], dict(ODRL_CONTEXT[1])],
        "@type": "Agreement",
        "uid": f"{ODRL_POLICY_BASE}{dataset.uuid}",
        "profile": ODRL_PROFILE,
        "dc:creator": ODRL_CREATOR,
        "dc:description": f"Policy for dataset: {dataset.name}",
        "dc:issued": format_issued(issued),
        "permission": [permission],
    }


# ------------------------------------------------------------------------------
# Text rendering
# ------------------------------------------------------------------------------

def to_json_text(document: dict) -> str:
    """Pretty-prints a policy document, keeping key order."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def generate_ids_policy(dataset: Dataset, config: PolicyConfig) -> str:
    return to_json_text(compile_ids(dataset, config))


def generate_odrl_policy(dataset: Dataset, config: PolicyConfig, issued: Optional[datetime] = None) -> str:
    return to_json_text(compile_odrl(dataset, config, issued))
