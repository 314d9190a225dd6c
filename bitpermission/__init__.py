"""
BitPermission

Compresses sets of permissions drawn from closed, ordered catalogues into one
radix-32 bitmask per catalogue, and back.
"""

from .bit_permission import BitPermission
from .bitmask_handler import BitmaskCodec, from_radix, to_radix
from .catalog_handler import PermissionCatalogRegistry, PermissionDomain, PermissionValue
from .config import APP_VERSION as __version__
from .exceptions import (
    BitPermissionError,
    InvalidInputError,
    MalformedBitmaskError,
    MalformedWireFormatError,
    NullReferenceError,
)
from .membership_handler import MembershipChecker
from .permission_service import BitPermissionService

__all__ = [
    "BitPermission",
    "BitPermissionError",
    "BitPermissionService",
    "BitmaskCodec",
    "InvalidInputError",
    "MalformedBitmaskError",
    "MalformedWireFormatError",
    "MembershipChecker",
    "NullReferenceError",
    "PermissionCatalogRegistry",
    "PermissionDomain",
    "PermissionValue",
    "from_radix",
    "to_radix",
]
