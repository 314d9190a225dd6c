"""
Wire Handler Module

Maps BitPermission values to and from their wire form, a single-key object
whose key is "<domain>@<revision>" and whose value is the bitmask text:

    {"SmallTestPermissions@128": "4000000000000g000040000201"}

Parsing is strict: any structural problem raises MalformedWireFormatError.
"""

import json
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List

from . import config
from .bit_permission import BitPermission
from .exceptions import MalformedWireFormatError, NullReferenceError

_REVISION = re.compile(r"[0-9]+")


def to_wire(bit_permission: BitPermission) -> Dict[str, str]:
    """
    Convert a BitPermission to its single-key wire mapping.

    Raises:
        NullReferenceError: If the value or any of its fields is None.
    """
    if bit_permission is None:
        raise NullReferenceError("BitPermission must not be None")
    for field in ("domain", "revision", "bitmask"):
        if getattr(bit_permission, field) is None:
            raise NullReferenceError(f"BitPermission {field} must not be None")

    key = f"{bit_permission.domain}{config.DOMAIN_AND_REVISION_DIVIDER}{bit_permission.revision}"
    return {key: bit_permission.bitmask}


def from_wire(data: Any) -> BitPermission:
    """
    Parse a single-key wire mapping into a BitPermission.

    Args:
        data: Mapping of exactly one "<domain>@<revision>" key to bitmask text

    Returns:
        BitPermission: The parsed value.

    Raises:
        MalformedWireFormatError: If the mapping or its key is malformed.
    """
    if not isinstance(data, Mapping):
        raise MalformedWireFormatError(f"Expected a mapping, got {type(data).__name__}")
    if len(data) != 1:
        raise MalformedWireFormatError(f"Expected exactly one key, got {len(data)}")

    ((domain_and_revision, bitmask),) = data.items()
    if not isinstance(domain_and_revision, str):
        raise MalformedWireFormatError(f"Key must be a string, got {domain_and_revision!r}")
    if not isinstance(bitmask, str):
        raise MalformedWireFormatError(f"Bitmask must be a string, got {type(bitmask).__name__}")

    parts = domain_and_revision.split(config.DOMAIN_AND_REVISION_DIVIDER)
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise MalformedWireFormatError(f"Failed to split domain and revision: {domain_and_revision!r}")

    domain, revision_text = parts
    if not _REVISION.fullmatch(revision_text) or int(revision_text) <= 0:
        raise MalformedWireFormatError(f"Revision must be a positive integer: {revision_text!r}")

    return BitPermission(domain, int(revision_text), bitmask)


def to_wire_list(bit_permissions: Iterable[BitPermission]) -> List[Dict[str, str]]:
    """
    Convert BitPermission values to a list of wire mappings.

    Raises:
        NullReferenceError: If any value or field is None.
    """
    return [to_wire(bit_permission) for bit_permission in bit_permissions]


def from_wire_list(data: Any) -> List[BitPermission]:
    """Parse a list of wire mappings; anything but a list is malformed."""
    if not isinstance(data, list):
        raise MalformedWireFormatError(f"Expected a list, got {type(data).__name__}")
    return [from_wire(item) for item in data]


def dumps(bit_permissions: Iterable[BitPermission]) -> str:
    """Serialize BitPermission values as a JSON array of wire mappings."""
    return json.dumps(to_wire_list(bit_permissions), separators=(",", ":"))


def loads(text: str) -> List[BitPermission]:
    """
    Deserialize a JSON array of wire mappings.

    Raises:
        MalformedWireFormatError: If the text is not JSON or any element is malformed.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedWireFormatError(f"Invalid JSON: {e}") from e
    return from_wire_list(data)
