from __future__ import annotations

import enum
from dataclasses import dataclass, field
from itertools import cycle
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, Iterable, Iterator, Mapping
from typing import Sequence as TySequence
from typing import TypeVar

if TYPE_CHECKING:
    from faker import Faker

T = TypeVar("T")


class Strategy(enum.Enum):
    """Tell if a related object must be created or only instantiated."""

    CREATE = enum.auto()
    BUILD = enum.auto()


class Kind:
    """Describe how one attribute value is produced.

    A kind is one of `Literal`, `Invocable` or a `NamedGenerator`.
    Any other value is handled as a literal.
    """


@dataclass(slots=True)
class Literal(Kind, Generic[T]):
    value: T


@dataclass(slots=True)
class Invocable(Kind, Generic[T]):
    wrapped: Callable[[Any, Faker], T]
    """
    Any callable that has 2 parameters: the instance being built and the faker.

    ```python
    Invocable(lambda instance, faker: f"{instance.name}@example.com".lower())
    ```
    """


class NamedGenerator(Kind):
    """Descriptor resolved by the generator registered under `generator`."""

    generator: ClassVar[str]


@dataclass(init=False)
class Fake(NamedGenerator):
    """Ask faker for a value.

    ```python
    Fake("email")
    Fake("pyint", min_value=1, max_value=10)
    Fake("user_name", unique=True)
    Fake("company", optional=0.5)
    ```
    """

    generator = "fake"

    formatter: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    unique: bool
    optional: float | None
    """Probability to get a value instead of `default`"""
    default: Any

    def __init__(
        self,
        formatter: str,
        /,
        *args: Any,
        unique: bool = False,
        optional: float | None = None,
        default: Any = None,
        **kwargs: Any,
    ) -> None:
        if optional is not None and not 0 <= optional <= 1:
            raise ValueError("optional must be between 0 and 1")
        self.formatter = formatter
        self.args = args
        self.kwargs = kwargs
        self.unique = unique
        self.optional = optional
        self.default = default


@dataclass
class Related(NamedGenerator):
    """Build another model through the factory.

    When strategy is not set, the related object is created if the owner
    is pending or saved, and only instantiated otherwise.
    """

    generator = "factory"

    model: Any
    overrides: Mapping[str, Any] | None = None
    attr: str | None = None
    """When set, returns this attribute of the related object instead of itself"""
    strategy: Strategy | None = None


@dataclass
class Sequence(NamedGenerator, Generic[T]):
    """
    Any callable where first argument is the index of the sequence counter.

    For example, a simple counter:

    ```python
    Sequence(lambda i: f"rank#{i}")  # rank#0, rank#1, rank#2...
    ```
    """

    generator = "sequence"

    template: Callable[[int], T] = field(default=lambda i: i)
    start: int = 0

    def __post_init__(self) -> None:
        self.i = self.start

    def __next__(self) -> T:
        try:
            return self.template(self.i)
        finally:
            self.i += 1


@dataclass
class Cycle(NamedGenerator, Generic[T]):
    generator = "cycle"

    values: Iterable[T]

    def __post_init__(self) -> None:
        self.values = list(self.values)
        if not self.values:
            raise ValueError("values cannot be empty")
        self.it: Iterator[T] = cycle(self.values)

    def __next__(self) -> T:
        return next(self.it)


@dataclass
class RandomValue(NamedGenerator, Generic[T]):
    generator = "random"

    values: TySequence[T]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("values cannot be empty")
