"""
Membership Handler Module

Answers whether permissions are present in previously encoded BitPermission
entries without decoding them into permission lists.

Usage:
    from bitpermission.membership_handler import MembershipChecker

    checker = MembershipChecker(registry, logger=logger)

    checker.check_has_permission(Perms.READ, bit_permissions)
    checker.check_has_permissions([Perms.READ, Perms.WRITE], bit_permissions)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .bit_permission import BitPermission
from .bitmask_handler import BitmaskCodec, bitmask_from_ordinals, from_radix, has_bits
from .catalog_handler import PermissionCatalogRegistry, PermissionDomain
from .exceptions import MalformedBitmaskError


class MembershipChecker:
    """
    Checks permissions against stored bitmasks.
    """

    def __init__(self, registry: PermissionCatalogRegistry, codec: Optional[BitmaskCodec] = None, logger=None):
        """
        Initialize the membership checker.

        Args:
            registry: The catalogue registry used at encoding time
            codec: Codec sharing the registry (optional, created when omitted)
            logger: Logger instance for debug/error logging (optional)
        """
        self.registry = registry
        self.codec = codec if codec is not None else BitmaskCodec(registry, logger)

        if logger is None:
            self.logger = logging.getLogger("bitpermission.membershipchecker")
        else:
            self.logger = logger.getChild("bitpermission.membershipchecker")

    def check_has_permissions(
        self, permissions: Iterable[Any], bit_permissions: Iterable[Optional[BitPermission]]
    ) -> bool:
        """
        Checks that every permission is granted by the stored entries.

        A request containing any unknown permission can never be satisfied. A
        domain without a stored entry, or whose stored bitmask cannot be parsed,
        fails the check.

        Args:
            permissions: The required permissions
            bit_permissions: The stored entries; for repeated domains the last
            entry wins

        Returns:
            bool: True if all required bits are set, False otherwise.
        """
        permissions = list(permissions)
        known_permissions = self.codec.get_known_permissions(permissions)
        if not known_permissions or len(known_permissions) != len(permissions):
            return False

        domain_index = self._index_by_domain(bit_permissions)
        return all(
            self._is_present(domain, ordinals, domain_index)
            for domain, ordinals in self.codec.get_domain_ordinals(known_permissions).items()
        )

    def _index_by_domain(self, bit_permissions: Iterable[Optional[BitPermission]]) -> Dict[str, BitPermission]:
        index: Dict[str, BitPermission] = {}
        for bit_permission in bit_permissions:
            if not isinstance(bit_permission, BitPermission):
                continue
            if not isinstance(bit_permission.domain, str) or not bit_permission.domain.strip():
                continue
            index[bit_permission.domain] = bit_permission
        return index

    def _is_present(
        self, domain: PermissionDomain, ordinals: Iterable[int], domain_index: Dict[str, BitPermission]
    ) -> bool:
        bit_permission = domain_index.get(domain.name)
        if bit_permission is None:
            return False
        try:
            stored = from_radix(bit_permission.bitmask)
        except MalformedBitmaskError as e:
            self.logger.warning(f"Cannot check domain '{domain.name}': {e}")
            return False
        return has_bits(stored, bitmask_from_ordinals(ordinals))

    def check_has_permission(self, permission: Any, bit_permissions: List[Optional[BitPermission]]) -> bool:
        """
        Checks a single permission against the first entry of its domain.

        Args:
            permission: The required permission
            bit_permissions: The stored entries

        Returns:
            bool: True if the permission's bit is set, False if the permission is
            unknown or no entry exists for its domain.

        Raises:
            MalformedBitmaskError: If the matched entry's bitmask is not valid
            radix-32 text.
        """
        resolved = self.registry.resolve(permission)
        if resolved is None:
            return False
        domain, ordinal = resolved

        bit_permission = next(
            (
                bp
                for bp in bit_permissions
                if isinstance(bp, BitPermission) and bp.domain == domain.name
            ),
            None,
        )
        if bit_permission is None:
            return False

        return has_bits(from_radix(bit_permission.bitmask), 1 << ordinal)
