from typing import Any
import uuid
from dataclasses import dataclass

from fixtory import FACTORY, Fake, create, define, delete_saved, seed


@dataclass(kw_only=True)
class User:
    id: uuid.UUID | None = None
    name: str | None = None


REPO: Any = {"user_by_ids": {}}


def persist(instance: User) -> bool:
    instance_id = instance.id = instance.id or uuid.uuid4()
    REPO["user_by_ids"][instance_id] = instance
    return True


def remove(instance: User) -> bool:
    return REPO["user_by_ids"].pop(instance.id, None) is not None


FACTORY.set_custom_saver(persist).set_custom_deleter(remove)
define(User, {"name": Fake("name")})


users = [
    create(User, {"name": "John"}),
    create(User, {"name": "Paul"}),
    create(User, {"name": "Ringo"}),
    *seed(2, User),
]

print(users)
print(REPO)

delete_saved()
print(REPO)
