"""
Catalog Handler Module

Provides the permission catalogues (domains) and the immutable registry that
assigns every permission value its bit position.

Usage:
    from enum import Enum
    from bitpermission.catalog_handler import PermissionCatalogRegistry, PermissionDomain

    class DocumentPermissions(Enum):
        READ = "read"
        WRITE = "write"

    reports = PermissionDomain("ReportPermissions", ["VIEW", "EXPORT"])
    registry = PermissionCatalogRegistry({DocumentPermissions, reports})

    registry.resolve(DocumentPermissions.WRITE)   # (<DocumentPermissions domain>, 1)
    registry.resolve(reports["EXPORT"])            # (<ReportPermissions domain>, 1)
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .exceptions import InvalidInputError, NullReferenceError


class PermissionValue:
    """
    Opaque handle for one value of an explicitly built PermissionDomain.

    Handles compare by identity; two domains never share a handle.
    """

    __slots__ = ("name", "ordinal", "domain")

    def __init__(self, name: str, ordinal: int, domain: "PermissionDomain"):
        self.name = name
        self.ordinal = ordinal
        self.domain = domain

    def __repr__(self) -> str:
        return f"<PermissionValue {self.domain.name}.{self.name}: {self.ordinal}>"


class PermissionDomain:
    """
    A named, closed and ordered catalogue of permission values.

    The position of a value in ``values`` is its ordinal and therefore its bit
    index. ``identity`` is the token the registry compares by reference to tell
    two unrelated catalogues sharing a name apart: the domain itself for
    explicitly built domains, the enum class for enum backed ones.
    """

    def __init__(self, name: str, value_names: Iterable[str]):
        """
        Build a domain from explicit value names.

        Args:
            name: Unique domain name
            value_names: Distinct value names in bit order

        Raises:
            NullReferenceError: If name, value_names or any value name is None.
            InvalidInputError: If a name is blank or a value name is repeated.
        """
        if value_names is None:
            raise NullReferenceError(f"Value names of domain '{name}' must not be None")
        if isinstance(value_names, str):
            raise InvalidInputError(f"Value names of domain '{name}' must be a sequence, not a string")
        names = list(value_names)
        for value_name in names:
            if value_name is None:
                raise NullReferenceError(f"Domain '{name}' contains a None value name")
            if not isinstance(value_name, str) or not value_name.strip():
                raise InvalidInputError(
                    f"Domain '{name}' contains an invalid value name: {value_name!r}"
                )
        values = tuple(PermissionValue(value_name, index, self) for index, value_name in enumerate(names))
        self._populate(name, values, self)

    @classmethod
    def from_enum(cls, enum_cls, name: Optional[str] = None) -> "PermissionDomain":
        """
        Build a domain whose values are the members of an Enum class.

        Members keep their definition order; aliases are not separate values.
        The domain name defaults to the class name.
        """
        if enum_cls is None:
            raise NullReferenceError("Enum class must not be None")
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, Enum)):
            raise InvalidInputError(f"Not an Enum class: {enum_cls!r}")
        domain = cls.__new__(cls)
        domain._populate(name if name is not None else enum_cls.__name__, tuple(enum_cls), enum_cls)
        return domain

    def _populate(self, name: str, values: Tuple[Any, ...], identity: Any) -> None:
        if name is None:
            raise NullReferenceError("Domain name must not be None")
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError(f"Domain name must be a non-blank string, got {name!r}")

        by_name: Dict[str, Any] = {}
        for value in values:
            if value.name in by_name:
                raise InvalidInputError(f"Duplicate value '{value.name}' in domain '{name}'")
            by_name[value.name] = value

        self.name = name
        self.values = values
        self.identity = identity
        self._by_name = MappingProxyType(by_name)
        self._ordinals = MappingProxyType({value: index for index, value in enumerate(values)})

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __getitem__(self, value_name: str) -> Any:
        return self._by_name[value_name]

    def __repr__(self) -> str:
        return f"<PermissionDomain {self.name}: {len(self.values)} values>"

    def ordinal_of(self, value: Any) -> Optional[int]:
        """
        Get the ordinal of a value of this domain.

        Args:
            value: A PermissionValue or Enum member

        Returns:
            Optional[int]: The 0-based ordinal, or None if the value does not
            belong to this domain.
        """
        try:
            ordinal = self._ordinals.get(value)
        except TypeError:
            return None
        if ordinal is None or self.values[ordinal] is not value:
            return None
        return ordinal


class PermissionCatalogRegistry:
    """
    Immutable mapping from domain name to PermissionDomain.

    Built once and never mutated afterwards, so a single instance can be read
    from several threads without locking.
    """

    def __init__(self, domains: Iterable[Any], logger=None):
        """
        Initialize the registry.

        Args:
            domains: PermissionDomain instances and/or Enum classes
            logger: Logger instance for debug/error logging (optional)

        Raises:
            NullReferenceError: If domains or any element of it is None.
            InvalidInputError: If domains is empty, a domain has no values,
            two domains share a name or one catalogue is registered twice.
        """
        if logger is None:
            self.logger = logging.getLogger("bitpermission.catalogregistry")
        else:
            self.logger = logger.getChild("bitpermission.catalogregistry")

        if domains is None:
            raise NullReferenceError("Domains must not be None")

        resolved = [self._as_domain(domain) for domain in domains]
        if not resolved:
            raise InvalidInputError("Empty domain set is not allowed!")

        by_name: Dict[str, PermissionDomain] = {}
        by_identity: Dict[Any, PermissionDomain] = {}
        for domain in resolved:
            if not domain.values:
                raise InvalidInputError(f"Empty domains are not allowed: '{domain.name}'")
            if domain.name in by_name:
                raise InvalidInputError(f"Duplicate domain names are not allowed: '{domain.name}'")
            if domain.identity in by_identity:
                raise InvalidInputError(
                    f"Domain '{domain.name}' registers the same catalogue as "
                    f"'{by_identity[domain.identity].name}'"
                )
            by_name[domain.name] = domain
            by_identity[domain.identity] = domain

        self._domains: Mapping[str, PermissionDomain] = MappingProxyType(by_name)
        self._by_identity: Mapping[Any, PermissionDomain] = MappingProxyType(by_identity)

        self.logger.debug(
            f"Catalog registry initialized with {len(by_name)} domain(s): {', '.join(by_name)}"
        )

    @staticmethod
    def _as_domain(domain: Any) -> PermissionDomain:
        if domain is None:
            raise NullReferenceError("Domain set must not contain None")
        if isinstance(domain, PermissionDomain):
            return domain
        if isinstance(domain, type) and issubclass(domain, Enum):
            return PermissionDomain.from_enum(domain)
        raise InvalidInputError(f"Unsupported domain type: {type(domain).__name__}")

    @property
    def domains(self) -> Mapping[str, PermissionDomain]:
        """Read-only view of the registered domains, keyed by name."""
        return self._domains

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def __len__(self) -> int:
        return len(self._domains)

    def __iter__(self) -> Iterator[PermissionDomain]:
        return iter(self._domains.values())

    def lookup(self, name: Optional[str]) -> Optional[PermissionDomain]:
        """
        Look up a domain by name.

        Args:
            name: Domain name

        Returns:
            Optional[PermissionDomain]: The domain, or None if not registered.
        """
        if not isinstance(name, str):
            return None
        return self._domains.get(name)

    def revision_of(self, name: Optional[str]) -> Optional[int]:
        """Current catalogue size of a domain, or None if it is not registered."""
        domain = self.lookup(name)
        return len(domain.values) if domain is not None else None

    def resolve(self, permission: Any) -> Optional[Tuple[PermissionDomain, int]]:
        """
        Resolve a permission value to its registered domain and ordinal.

        A permission is known only when its domain is registered under its
        name and the registered catalogue is the very one the value came from.

        Args:
            permission: A PermissionValue or Enum member

        Returns:
            Optional[Tuple[PermissionDomain, int]]: (domain, ordinal), or None
            if the permission is unknown.
        """
        if isinstance(permission, PermissionValue):
            identity = permission.domain.identity
        elif isinstance(permission, Enum):
            identity = type(permission)
        else:
            return None

        domain = self._by_identity.get(identity)
        if domain is None or self._domains.get(domain.name) is not domain:
            return None
        ordinal = domain.ordinal_of(permission)
        if ordinal is None:
            return None
        return domain, ordinal
