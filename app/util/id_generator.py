"""
Identifier generator.

Produces the random identifiers used as the suffix of the URIs embedded
in generated policy documents. Identifiers follow the canonical
8-4-4-4-12 layout of a version 4 UUID, drawn from the operating
system's cryptographically strong random source.
"""

from uuid import uuid4


def generate_uuid() -> str:
    """
    Returns a new random identifier.

    Returns:
        str: Lowercase 36-character identifier, e.g.
        ``"0f8fad5b-d9cb-469f-a165-70867728950e"``.
    """

    return str(uuid4())
