from __future__ import annotations

import logging
from collections import UserDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from faker import Faker

from .errors import UnknownGenerator
from .types import Instance
from .values import Cycle, Fake, Invocable, Kind, Literal, NamedGenerator, Related, RandomValue, Sequence, Strategy

if TYPE_CHECKING:
    from .bases import Fixtory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerationContext:
    """What a generator may use to produce a value."""

    instance: Instance | None
    faker: Faker
    factory: Fixtory


class Generator(Protocol):
    def generate(self, kind: Any, context: GenerationContext) -> Any:
        ...


class FakeGenerator:
    def generate(self, kind: Fake, context: GenerationContext) -> Any:
        faker = context.faker
        if kind.optional is not None and faker.random.random() >= kind.optional:
            return kind.default
        source = faker.unique if kind.unique else faker
        formatter = getattr(source, kind.formatter)
        return formatter(*kind.args, **kind.kwargs)


class RelatedGenerator:
    """Build related objects, re-entering the factory."""

    def generate(self, kind: Related, context: GenerationContext) -> Any:
        factory = context.factory
        strategy = kind.strategy
        if strategy is None:
            if context.instance is not None and factory.is_pending_or_saved(context.instance):
                strategy = Strategy.CREATE
            else:
                strategy = Strategy.BUILD
        if strategy == Strategy.CREATE:
            related = factory.create(kind.model, kind.overrides)
        else:
            related = factory.instance(kind.model, kind.overrides)
        if kind.attr:
            return getattr(related, kind.attr)
        return related


class SequenceGenerator:
    def generate(self, kind: Sequence[Any], context: GenerationContext) -> Any:
        return next(kind)


class CycleGenerator:
    def generate(self, kind: Cycle[Any], context: GenerationContext) -> Any:
        return next(kind)


class RandomValueGenerator:
    def generate(self, kind: RandomValue[Any], context: GenerationContext) -> Any:
        return context.faker.random.choice(kind.values)


class Generators(UserDict[str, Generator]):
    """Registry of generator implementations, by name."""

    def get_generator(self, name: str) -> Generator:
        try:
            return self.data[name]
        except KeyError:
            raise UnknownGenerator(name) from None


def default_generators() -> Generators:
    return Generators(
        {
            Fake.generator: FakeGenerator(),
            Related.generator: RelatedGenerator(),
            Sequence.generator: SequenceGenerator(),
            Cycle.generator: CycleGenerator(),
            RandomValue.generator: RandomValueGenerator(),
        }
    )


class FakerProvider:
    """Lazily instantiate faker, and drop it whenever the locale changes."""

    def __init__(self, locale: str, seed: int | None = None) -> None:
        self._locale = locale
        self._seed = seed
        self._faker: Faker | None = None

    @property
    def locale(self) -> str:
        return self._locale

    @locale.setter
    def locale(self, value: str) -> None:
        self._locale = value
        self._faker = None

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value: int | None) -> None:
        self._seed = value
        self._faker = None

    def get(self) -> Faker:
        if self._faker is None:
            logger.debug("instantiate faker for locale %s", self._locale)
            faker = Faker(self._locale)
            if self._seed is not None:
                faker.seed_instance(self._seed)
            self._faker = faker
        return self._faker


class Dispatcher:
    """Resolve a kind into a concrete value."""

    def __init__(self, factory: Fixtory, generators: Generators, faker: FakerProvider) -> None:
        self.factory = factory
        self.generators = generators
        self.faker = faker

    def generate(self, kind: Any, instance: Instance | None = None) -> Any:
        match kind:
            case Literal(value):
                return value
            case Invocable(wrapped):
                return wrapped(instance, self.faker.get())
            case NamedGenerator():
                generator = self.generators.get_generator(kind.generator)
                context = GenerationContext(instance=instance, faker=self.faker.get(), factory=self.factory)
                return generator.generate(kind, context)
            case Kind():
                raise TypeError(f"unsupported kind {kind!r}")
            case _:
                return kind
