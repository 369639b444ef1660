"""Localized string pool with reference-counted stealing.

A pool slot starts with the number of entries that reference it. The last
reader (count exactly 1) takes the value and the pool releases it; earlier
readers get a shared copy. COMPACT pools carry no counts and use
`UNTRACKED`, which is never stolen and never decremented.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..errors import InvalidReference, E_INVALID_REFERENCE

__all__ = ["UNTRACKED", "PooledString", "StringPool"]

UNTRACKED = -1


@dataclass(slots=True)
class PooledString:
    value: Optional[str]
    ref_count: int = UNTRACKED

    @property
    def exhausted(self) -> bool:
        return self.ref_count == 0


class StringPool:
    def __init__(self, items: Iterable[PooledString] = ()):
        self._items: List[PooledString] = list(items)
        self.steals = 0
        self.copies = 0

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> PooledString:
        return self._items[index]

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def take(self, index: int, namespace: str = "", key: str = "") -> str:
        """Return the string at `index`, stealing it on its last reference."""
        if not self.in_range(index):
            raise InvalidReference(
                code=E_INVALID_REFERENCE,
                message=(
                    "LocRes has an invalid localized string index for "
                    f"namespace '{namespace}' and key '{key}'"
                ),
                context={
                    "namespace": namespace,
                    "key": key,
                    "index": index,
                    "pool_size": len(self._items),
                },
            )
        slot = self._items[index]
        if slot.exhausted or slot.value is None:
            raise InvalidReference(
                code=E_INVALID_REFERENCE,
                message=(
                    f"Localized string {index} referenced more often than "
                    f"its count for namespace '{namespace}' and key '{key}'"
                ),
                context={"namespace": namespace, "key": key, "index": index},
            )
        if slot.ref_count == 1:
            value = slot.value
            slot.value = None
            slot.ref_count = 0
            self.steals += 1
            return value
        if slot.ref_count != UNTRACKED:
            slot.ref_count -= 1
        self.copies += 1
        return slot.value
