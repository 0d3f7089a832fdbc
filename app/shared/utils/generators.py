"""ID generators and parsers for document identifiers."""

import uuid


def generate_document_id() -> str:
    """Generate a new document identifier (random 128-bit UUID4, canonical text form).

    Returns:
        A new lowercase, hyphenated UUID string.
    """
    return str(uuid.uuid4())


def parse_document_id(value: str) -> str | None:
    """Return the canonical form of value if it is a UUID, else None.

    Canonical form is what generate_document_id produces, so lookups by
    an upper-case or brace-wrapped id hit the same record and blob.
    """
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        return None
