from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from pytest_subtests import SubTests

from fixtory import (
    Cycle,
    Fake,
    GenerationContext,
    Invocable,
    Kind,
    NamedGenerator,
    RandomValue,
    Related,
    Sequence,
    Strategy,
    UnknownGenerator,
)
from fixtory.bases import Fixtory


@dataclass(eq=False)
class User:
    id: int | None = None
    name: str | None = None

    def save(self) -> bool:
        return True

    def delete(self) -> bool:
        return True


@dataclass(eq=False)
class Post:
    author: Any = None
    author_id: int | None = None
    title: str | None = None

    def save(self) -> bool:
        return True

    def delete(self) -> bool:
        return True


def test_sequence() -> None:
    seq = Sequence(lambda i: f"rank#{i}")
    assert next(seq) == "rank#0"
    assert next(seq) == "rank#1"
    assert next(seq) == "rank#2"


def test_sequence_start(fx: Fixtory) -> None:
    fx.define(User, {"id": Sequence(start=1)})
    assert [user.id for user in fx.seed(3, User)] == [1, 2, 3]


def test_cycle(fx: Fixtory) -> None:
    fx.define(User, {"name": Cycle(["John", "Paul"])})
    assert [fx.instance(User).name for _ in range(3)] == ["John", "Paul", "John"]


def test_empty_cycle() -> None:
    with pytest.raises(ValueError):
        Cycle([])


def test_random_value(fx: Fixtory, subtests: SubTests) -> None:
    values = ["foo", "bar", "baz"]
    fx.define(User, {"name": RandomValue(values)})

    with subtests.test("picks among values"):
        assert fx.instance(User).name in values

    with subtests.test("reproducible with a seed"):
        fx.set_seed(123)
        first = [fx.instance(User).name for _ in range(5)]
        fx.set_seed(123)
        second = [fx.instance(User).name for _ in range(5)]
        assert first == second

    with subtests.test("empty values"):
        with pytest.raises(ValueError):
            RandomValue([])


def test_invocable(fx: Fixtory) -> None:
    SEEN = []

    def email(instance: User, faker: Any) -> str:
        SEEN.append((instance, faker))
        return f"{instance.name}@example.com".lower()

    fx.define(User, {"name": "John", "email": Invocable(email)})
    user = fx.instance(User)
    assert user.email == "john@example.com"
    assert SEEN == [(user, fx.get_faker())]


def test_fake(fx: Fixtory, subtests: SubTests) -> None:
    with subtests.test("formatter"):
        assert isinstance(fx.generate_attr(Fake("name")), str)

    with subtests.test("with arguments"):
        value = fx.generate_attr(Fake("pyint", min_value=3, max_value=5))
        assert 3 <= value <= 5

    with subtests.test("unique"):
        values = {fx.generate_attr(Fake("pyint", min_value=0, max_value=9, unique=True)) for _ in range(10)}
        assert values == set(range(10))

    with subtests.test("never optional"):
        assert fx.generate_attr(Fake("name", optional=0.0, default="nobody")) == "nobody"

    with subtests.test("always optional"):
        assert fx.generate_attr(Fake("name", optional=1.0, default="nobody")) != "nobody"

    with subtests.test("invalid optional"):
        with pytest.raises(ValueError):
            Fake("name", optional=2)

    with subtests.test("unknown formatter"):
        with pytest.raises(AttributeError):
            fx.generate_attr(Fake("not_a_formatter"))


def test_seeded_fake(fx: Fixtory) -> None:
    fx.set_seed(42)
    first = fx.generate_attr(Fake("name"))
    fx.set_seed(42)
    assert fx.generate_attr(Fake("name")) == first


def test_locale(fx: Fixtory) -> None:
    faker = fx.get_faker()
    assert fx.get_faker() is faker
    assert faker.locales == ["en_US"]

    fx.set_locale("fr_FR")
    assert fx.settings.locale == "fr_FR"
    assert fx.get_faker() is not faker
    assert fx.get_faker().locales == ["fr_FR"]


class TestRelated:
    @pytest.fixture(autouse=True)
    def _define(self, fx: Fixtory) -> None:
        fx.define(User, {"id": Sequence(start=1), "name": "John"})
        fx.define(Post, {"author": Related(User), "title": "Hello"})

    def test_created_with_owner(self, fx: Fixtory) -> None:
        post = fx.create(Post)
        assert isinstance(post.author, User)
        assert fx.saved() == [post.author, post]

    def test_only_instantiated_with_owner(self, fx: Fixtory) -> None:
        post = fx.instance(Post)
        assert isinstance(post.author, User)
        assert not fx.is_pending_or_saved(post.author)

    def test_explicit_strategy(self, fx: Fixtory, subtests: SubTests) -> None:
        with subtests.test("build"):
            post = fx.create(Post, {"author": Related(User, strategy=Strategy.BUILD)})
            assert not fx.is_saved(post.author)

        with subtests.test("create"):
            post = fx.instance(Post, {"author": Related(User, strategy=Strategy.CREATE)})
            assert fx.is_saved(post.author)
            assert not fx.is_saved(post)

    def test_attribute_and_overrides(self, fx: Fixtory) -> None:
        post = fx.create(Post, {"author": None, "author_id": Related(User, {"name": "Paul"}, attr="id")})
        [author] = [obj for obj in fx.saved() if isinstance(obj, User)]
        assert post.author is None
        assert post.author_id == author.id
        assert author.name == "Paul"

    def test_deleted_after_owner(self, fx: Fixtory) -> None:
        DELETED = []
        fx.set_custom_deleter(lambda instance: DELETED.append(instance) or True)
        post = fx.create(Post)
        fx.delete_saved()
        assert DELETED == [post, post.author]


def test_custom_generator(fx: Fixtory) -> None:
    @dataclass
    class Upper(NamedGenerator):
        generator = "upper"

        attr: str

    class UpperGenerator:
        def generate(self, kind: Upper, context: GenerationContext) -> Any:
            return getattr(context.instance, kind.attr).upper()

    fx.register_generator("upper", UpperGenerator())
    fx.define(User, {"name": "john", "email": Upper("name")})
    assert fx.instance(User).email == "JOHN"


def test_unsupported_kind(fx: Fixtory) -> None:
    class Unsupported(Kind):
        pass

    with pytest.raises(TypeError):
        fx.generate_attr(Unsupported())


def test_unknown_generator(fx: Fixtory) -> None:
    class Unknown(NamedGenerator):
        generator = "unknown"

    with pytest.raises(UnknownGenerator) as excinfo:
        fx.generate_attr(Unknown())
    assert excinfo.value.name == "unknown"
