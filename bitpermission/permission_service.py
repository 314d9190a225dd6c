"""
BitPermission service.

Wires the catalogue registry, the bitmask codec and the membership checker
together behind one object.

Usage:
    from bitpermission import BitPermissionService

    service = BitPermissionService({DocumentPermissions, BillingPermissions})

    stored = service.get_bit_permissions([DocumentPermissions.READ])
    service.check_has_permission(DocumentPermissions.READ, stored)  # True
"""

import logging
from typing import Any, Iterable, List, Optional

from . import config
from .bit_permission import BitPermission
from .bitmask_handler import BitmaskCodec
from .catalog_handler import PermissionCatalogRegistry
from .membership_handler import MembershipChecker


class BitPermissionService:
    """
    Encodes, decodes and checks permission sets of a fixed set of domains.
    """

    def __init__(self, domains: Iterable[Any], logger=None):
        """
        Initialize the service.

        Args:
            domains: PermissionDomain instances and/or Enum classes
            logger: Logger instance for debug/error logging (optional)

        Raises:
            NullReferenceError: If domains or any element of it is None.
            InvalidInputError: If the domains cannot form a registry.
        """
        self.logger = logger if logger is not None else logging.getLogger(config.LOGGER_NAME)

        self.registry = PermissionCatalogRegistry(domains, logger)
        self.codec = BitmaskCodec(self.registry, logger)
        self.checker = MembershipChecker(self.registry, self.codec, logger)

        self.logger.debug(f"BitPermission service ready for {len(self.registry)} domain(s)")

    def get_bit_permissions(self, permissions: Iterable[Any]) -> List[BitPermission]:
        """
        Encodes permissions into one BitPermission per domain.

        Args:
            permissions: Permission values (PermissionValue or Enum members)

        Returns:
            List[BitPermission]: The encoded entries; unknown permissions are dropped.
        """
        return self.codec.get_bit_permissions(permissions)

    def get_permissions(self, bit_permissions: Iterable[Optional[BitPermission]]) -> List[Any]:
        """
        Decodes BitPermission entries back into permission values.

        Args:
            bit_permissions: The encoded entries

        Returns:
            List: The granted permissions; invalid entries contribute nothing.
        """
        return self.codec.get_permissions(bit_permissions)

    def check_has_permissions(
        self, permissions: Iterable[Any], bit_permissions: Iterable[Optional[BitPermission]]
    ) -> bool:
        """
        Checks that every permission is granted by the stored entries.

        Args:
            permissions: The required permissions
            bit_permissions: The stored entries

        Returns:
            bool: True if all are granted, False otherwise (never raises).
        """
        return self.checker.check_has_permissions(permissions, bit_permissions)

    def check_has_permission(self, permission: Any, bit_permissions: List[Optional[BitPermission]]) -> bool:
        """
        Checks a single permission against the first entry of its domain.

        Args:
            permission: The required permission
            bit_permissions: The stored entries

        Returns:
            bool: True if the permission is granted, False otherwise.

        Raises:
            MalformedBitmaskError: If the matched entry's bitmask cannot be parsed.
        """
        return self.checker.check_has_permission(permission, bit_permissions)
