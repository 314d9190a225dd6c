"""
Bitmask Handler Module

Converts permission values to per-domain bitmasks and back.

Each permission is represented by the bit at its ordinal, so a whole
permission set of one domain fits into a single integer. Python integers have
unbounded precision, so catalogues far beyond 64 values are supported. The
integer travels as lower-case radix-32 text.

Usage:
    from bitpermission.bitmask_handler import BitmaskCodec

    codec = BitmaskCodec(registry, logger)

    # Encode
    bit_permissions = codec.get_bit_permissions([Perms.READ, Perms.DELETE])

    # Decode
    permissions = codec.get_permissions(bit_permissions)
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Set

from . import config
from .bit_permission import BitPermission
from .catalog_handler import PermissionCatalogRegistry, PermissionDomain
from .exceptions import MalformedBitmaskError

_RADIX_TEXT = re.compile(r"[0-9a-vA-V]+")


def to_radix(value: int) -> str:
    """
    Encodes a non-negative integer as radix-32 text.

    Args:
        value (int): The integer to encode.

    Returns:
        str: Lower-case digits 0-9a-v, "0" for zero.

    Raises:
        MalformedBitmaskError: If value is not a non-negative integer.
    """
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MalformedBitmaskError(f"Bitmask must be a non-negative integer, got {value!r}")
    if value == 0:
        return config.BITMASK_DIGITS[0]

    digits = []
    while value > 0:
        value, remainder = divmod(value, config.BITMASK_RADIX)
        digits.append(config.BITMASK_DIGITS[remainder])
    return "".join(reversed(digits))


def from_radix(text: str) -> int:
    """
    Decodes radix-32 text (case-insensitive) into an integer.

    Args:
        text (str): The bitmask text.

    Returns:
        int: The decoded non-negative integer.

    Raises:
        MalformedBitmaskError: If text is not made of radix-32 digits only.
    """
    if not isinstance(text, str) or not _RADIX_TEXT.fullmatch(text):
        raise MalformedBitmaskError(f"Invalid radix-{config.BITMASK_RADIX} bitmask: {text!r}")
    return int(text, config.BITMASK_RADIX)


def bitmask_from_ordinals(ordinals: Iterable[int]) -> int:
    """Sum of 2**ordinal over the distinct ordinals."""
    bitmask = 0
    for ordinal in set(ordinals):
        bitmask += 1 << ordinal
    return bitmask


def has_bits(bitmask: int, required: int) -> bool:
    """True if every bit of required is also set in bitmask."""
    return bitmask & required == required


class BitmaskCodec:
    """
    Encodes permission values into BitPermission entries and decodes them back.

    Both directions are lenient: unknown permissions, unknown domains and
    malformed entries are skipped instead of raising.
    """

    def __init__(self, registry: PermissionCatalogRegistry, logger=None):
        """
        Initialize the codec.

        Args:
            registry: The catalogue registry that assigns bit positions
            logger: Logger instance for debug/error logging (optional)
        """
        self.registry = registry

        # Initialize logger
        if logger is None:
            self.logger = logging.getLogger("bitpermission.bitmaskcodec")
        else:
            self.logger = logger.getChild("bitpermission.bitmaskcodec")

    def get_known_permissions(self, permissions: Iterable[Any]) -> List[Any]:
        """
        Filters permissions down to those the registry knows.

        Args:
            permissions: Permission values (PermissionValue or Enum members)

        Returns:
            List: The known permissions, input order and duplicates preserved.
        """
        return [permission for permission in permissions if self.registry.resolve(permission) is not None]

    def get_domain_ordinals(self, known_permissions: Iterable[Any]) -> Dict[PermissionDomain, Set[int]]:
        """
        Groups known permissions by domain.

        Args:
            known_permissions: Permissions already filtered by get_known_permissions

        Returns:
            Dict[PermissionDomain, Set[int]]: Distinct ordinals per domain, domains
            in order of first appearance.
        """
        domain_ordinals: Dict[PermissionDomain, Set[int]] = {}
        for permission in known_permissions:
            resolved = self.registry.resolve(permission)
            if resolved is None:
                continue
            domain, ordinal = resolved
            domain_ordinals.setdefault(domain, set()).add(ordinal)
        return domain_ordinals

    def get_bit_permission(self, domain: PermissionDomain, ordinals: Iterable[int]) -> BitPermission:
        """Build the BitPermission of one domain; revision is the full catalogue size."""
        bitmask = bitmask_from_ordinals(ordinals)
        return BitPermission(domain.name, len(domain.values), to_radix(bitmask))

    def get_bit_permissions(self, permissions: Iterable[Any]) -> List[BitPermission]:
        """
        Converts a list of permissions into one BitPermission per domain.

        Unknown permissions are dropped silently; duplicates set their bit once.

        Args:
            permissions: Permission values (PermissionValue or Enum members)

        Returns:
            List[BitPermission]: One entry per distinct known domain in the input.
        """
        permissions = list(permissions)
        if not permissions:
            return []

        known_permissions = self.get_known_permissions(permissions)
        dropped = len(permissions) - len(known_permissions)
        if dropped:
            self.logger.debug(f"Dropped {dropped} unknown permission(s) while encoding")

        bit_permissions = [
            self.get_bit_permission(domain, ordinals)
            for domain, ordinals in self.get_domain_ordinals(known_permissions).items()
        ]
        self.logger.debug(
            f"Encoded {len(known_permissions)} permission(s) into {len(bit_permissions)} bitmask(s)"
        )
        return bit_permissions

    def get_permissions(self, bit_permissions: Iterable[Optional[BitPermission]]) -> List[Any]:
        """
        Converts BitPermission entries back into permission values.

        Equal entries are processed once. Entries that are None, not well formed,
        for an unregistered domain or carrying unparsable bitmask text contribute
        nothing.

        Args:
            bit_permissions: The encoded entries

        Returns:
            List: Permissions of each entry in catalogue order, entries in input order.
        """
        permissions: List[Any] = []
        for bit_permission in dict.fromkeys(bit_permissions):
            permissions.extend(self.get_permissions_from_bit_permission(bit_permission))
        return permissions

    def get_permissions_from_bit_permission(self, bit_permission: Optional[BitPermission]) -> List[Any]:
        """Decode a single entry, returning [] for anything that cannot be decoded."""
        if not isinstance(bit_permission, BitPermission) or not bit_permission.is_well_formed():
            return []

        domain = self.registry.lookup(bit_permission.domain)
        if domain is None:
            return []

        try:
            bitmask = from_radix(bit_permission.bitmask)
        except MalformedBitmaskError as e:
            self.logger.warning(f"Skipping bitmask of domain '{domain.name}': {e}")
            return []

        if bit_permission.revision != len(domain.values):
            self.logger.debug(
                f"Revision drift for domain '{domain.name}': encoded with "
                f"{bit_permission.revision}, catalogue has {len(domain.values)}"
            )

        return [value for ordinal, value in enumerate(domain.values) if has_bits(bitmask, 1 << ordinal)]

    def is_current_revision(self, bit_permission: Optional[BitPermission]) -> bool:
        """
        Checks whether an entry was encoded against the current catalogue size.

        Args:
            bit_permission: The entry to check

        Returns:
            bool: True if the domain is registered and the revision matches its
            current catalogue size, False otherwise.
        """
        if not isinstance(bit_permission, BitPermission) or not bit_permission.is_well_formed():
            return False
        return self.registry.revision_of(bit_permission.domain) == bit_permission.revision

    def compare(
        self,
        first: Iterable[Optional[BitPermission]],
        second: Iterable[Optional[BitPermission]],
    ) -> Dict[str, List[Any]]:
        """
        Compares two BitPermission collections.

        Args:
            first: The first collection
            second: The second collection

        Returns:
            Dict[str, List]: The permissions held by both ("common"), only by
            the first ("only_in_first") and only by the second ("only_in_second").
        """
        first_masks = self._domain_bitmasks(first)
        second_masks = self._domain_bitmasks(second)

        result: Dict[str, List[Any]] = {"common": [], "only_in_first": [], "only_in_second": []}
        for domain in self._ordered_domains(first_masks, second_masks):
            first_mask = first_masks.get(domain, 0)
            second_mask = second_masks.get(domain, 0)
            result["common"].extend(self._values_in(domain, first_mask & second_mask))
            result["only_in_first"].extend(self._values_in(domain, first_mask & ~second_mask))
            result["only_in_second"].extend(self._values_in(domain, second_mask & ~first_mask))
        return result

    def _domain_bitmasks(self, bit_permissions: Iterable[Optional[BitPermission]]) -> Dict[PermissionDomain, int]:
        masks: Dict[PermissionDomain, int] = {}
        for permission in self.get_permissions(bit_permissions):
            domain, ordinal = self.registry.resolve(permission)
            masks[domain] = masks.get(domain, 0) | (1 << ordinal)
        return masks

    @staticmethod
    def _ordered_domains(*masks: Dict[PermissionDomain, int]) -> List[PermissionDomain]:
        return list(dict.fromkeys(domain for mask in masks for domain in mask))

    @staticmethod
    def _values_in(domain: PermissionDomain, bitmask: int) -> List[Any]:
        return [value for ordinal, value in enumerate(domain.values) if bitmask >> ordinal & 1]
