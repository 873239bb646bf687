import gc
from dataclasses import dataclass

from fixtory.tracker import IdentityMap, IdentitySet, Lifecycle


@dataclass
class Item:
    value: int = 0


def test_identity_set() -> None:
    a, b, c = Item(), Item(), Item()
    members: IdentitySet[Item] = IdentitySet()
    members.add(a)
    members.add(b)
    members.add(a)
    assert list(members) == [a, b]
    assert a in members
    assert c not in members
    assert len(members) == 2
    assert list(reversed(members)) == [b, a]

    members.discard(c)
    members.discard(a)
    assert list(members) == [b]
    assert a not in members


def test_identity_set_keeps_insertion_order() -> None:
    items = [Item(i) for i in range(5)]
    members: IdentitySet[Item] = IdentitySet()
    for item in items:
        members.add(item)
    members.discard(items[2])
    members.add(items[2])
    assert [item.value for item in members] == [0, 1, 3, 4, 2]


def test_lifecycle() -> None:
    lifecycle = Lifecycle()
    obj = Item()
    assert not lifecycle.is_pending_or_saved(obj)

    lifecycle.mark_pending(obj)
    assert lifecycle.is_pending(obj)
    assert not lifecycle.is_saved(obj)

    lifecycle.mark_saved(obj)
    assert lifecycle.is_saved(obj)
    assert not lifecycle.is_pending(obj)

    lifecycle.mark_pending(obj)
    assert not lifecycle.is_pending(obj)

    lifecycle.forget(obj)
    assert not lifecycle.is_pending_or_saved(obj)


def test_identity_map() -> None:
    a, b = Item(), Item()
    origins: IdentityMap[str] = IdentityMap()
    origins.set(a, "User")
    assert origins.get(a) == "User"
    assert origins.get(b) is None

    origins.discard(a)
    assert origins.get(a) is None


def test_identity_map_drops_collected_objects() -> None:
    origins: IdentityMap[str] = IdentityMap()
    origins.set(Item(), "User")
    gc.collect()
    assert len(origins) == 0


def test_identity_map_holds_objects_without_weak_references() -> None:
    origins: IdentityMap[str] = IdentityMap()
    obj: dict[str, str] = {}
    origins.set(obj, "Post")
    assert origins.get(obj) == "Post"
    assert origins.get({}) is None
