"""
BitPermission value type.

A BitPermission is the serializable unit produced by encoding: the name of a
permission domain, the catalogue size of that domain at encoding time
(revision) and the radix-32 text of the bitmask.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BitPermission:
    """
    Immutable {domain, revision, bitmask} triple with value semantics.

    Fields are not validated on construction; decode and check paths skip
    entries that are not well formed.
    """

    domain: Optional[str]
    revision: Optional[int]
    bitmask: Optional[str]

    def is_well_formed(self) -> bool:
        """
        Check the domain / revision / bitmask invariant.

        Returns:
            bool: True if domain and bitmask are non-blank strings and
            revision is a positive integer, False otherwise.
        """
        return (
            isinstance(self.domain, str)
            and bool(self.domain.strip())
            and isinstance(self.bitmask, str)
            and bool(self.bitmask.strip())
            and isinstance(self.revision, int)
            and not isinstance(self.revision, bool)
            and self.revision > 0
        )
