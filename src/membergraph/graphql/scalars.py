"""
Custom GraphQL scalars
"""

import re
from typing import Any, NewType

import strawberry

from ..errors import ScalarCoercionError

# RFC 9562 textual form: versions 1-8 with the RFC variant, plus the nil and max values
UUID_PATTERN = re.compile(
    r"(?:[0-9a-f]{8}-[0-9a-f]{4}-[1-8][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
    r"|00000000-0000-0000-0000-000000000000"
    r"|ffffffff-ffff-ffff-ffff-ffffffffffff)",
    re.IGNORECASE,
)


def is_uuid(value: Any) -> bool:
    """Check whether ``value`` is a string in canonical UUID form."""
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def serialize_uuid(value: Any) -> str:
    if not is_uuid(value):
        raise ScalarCoercionError(f"UUID cannot represent value: {value!r}")
    return value


def parse_uuid(value: Any) -> str:
    """Validate client input and return it in lowercase, the form the stores key on."""
    if not is_uuid(value):
        raise ScalarCoercionError(f"Invalid UUID: {value!r}")
    return value.lower()


UUID = strawberry.scalar(
    NewType("UUID", str),
    name="UUID",
    description="Canonical textual form of a 128-bit identifier",
    serialize=serialize_uuid,
    parse_value=parse_uuid,
)
