from __future__ import annotations

import weakref
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")
V = TypeVar("V")


class IdentitySet(Generic[T]):
    """Insertion ordered set of objects, compared by identity and not by value.

    Members are keyed by `id()` and kept alive by the set, so their ids stay
    stable while tracked. They do not need to be hashable.
    """

    __slots__ = ("_members",)

    def __init__(self) -> None:
        self._members: dict[int, T] = {}

    def add(self, obj: T) -> None:
        self._members.setdefault(id(obj), obj)

    def discard(self, obj: T) -> None:
        if self._members.get(id(obj)) is obj:
            del self._members[id(obj)]

    def __contains__(self, obj: object) -> bool:
        return self._members.get(id(obj)) is obj

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._members.values()))

    def __reversed__(self) -> Iterator[T]:
        return reversed(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"IdentitySet({list(self._members.values())!r})"


class IdentityMap(Generic[V]):
    """Values attached to objects by identity.

    Objects that support weak references are not kept alive, their entry
    goes away with them. Others are held until discarded.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, V]] = {}

    def set(self, obj: object, value: V) -> None:
        key = id(obj)
        try:
            ref: Any = weakref.ref(obj, lambda _, key=key: self._entries.pop(key, None))
        except TypeError:
            ref = obj
        self._entries[key] = (ref, value)

    def get(self, obj: object) -> V | None:
        entry = self._entries.get(id(obj))
        if entry is None:
            return None
        ref, value = entry
        target = ref() if isinstance(ref, weakref.ref) else ref
        return value if target is obj else None

    def discard(self, obj: object) -> None:
        if self.get(obj) is not None:
            del self._entries[id(obj)]

    def __len__(self) -> int:
        return len(self._entries)


class Lifecycle:
    """Track objects pending save and saved.

    An object belongs to at most one of them at any time.
    """

    def __init__(self) -> None:
        self.pending: IdentitySet[object] = IdentitySet()
        self.saved: IdentitySet[object] = IdentitySet()

    def mark_pending(self, obj: object) -> None:
        if obj not in self.saved:
            self.pending.add(obj)

    def mark_saved(self, obj: object) -> None:
        self.pending.discard(obj)
        self.saved.add(obj)

    def forget(self, obj: object) -> None:
        self.pending.discard(obj)
        self.saved.discard(obj)

    def is_pending(self, obj: object) -> bool:
        return obj in self.pending

    def is_saved(self, obj: object) -> bool:
        return obj in self.saved

    def is_pending_or_saved(self, obj: object) -> bool:
        return obj in self.pending or obj in self.saved
