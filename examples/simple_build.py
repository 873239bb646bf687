from dataclasses import dataclass

from fixtory import Fake, Invocable, define, definition, instance


@dataclass
class User:
    name: str | None = None
    email: str | None = None
    age: int | None = None
    role: str = "user"


with definition(User) as user_factory:
    user_factory.set("name", Fake("first_name"))
    user_factory.set("age", 21)
    user_factory.set("email", Invocable(lambda user, faker: f"{user.name}@example.com".lower()))

define("admin:User", {"role": "admin"})


user: User = instance(User)
print(user)

user = instance(User, {"name": "Daniel"})
print(user)

user = instance("admin:User")
print(user)
