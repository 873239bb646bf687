from __future__ import annotations

from collections import UserDict
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Self

from .errors import NoDefinedFactory
from .types import AttributeSpec, Callback, ModelName


class Identifier(NamedTuple):
    """Resolved model identifier.

    `key` is the full identifier used to look up definitions,
    `type_name` the model type to instantiate.
    """

    key: str
    group: str | None
    type_name: str


@dataclass(kw_only=True)
class Definition:
    model: str
    attributes: dict[str, Any] = field(default_factory=dict)
    callback: Callback | None = None


class Definitions(UserDict[str, Definition]):
    """Definitions by model identifier."""

    def define(self, key: str, attributes: AttributeSpec | None = None, callback: Callback | None = None) -> Definition:
        definition = self.data[key] = Definition(model=key, attributes=dict(attributes or {}), callback=callback)
        return definition

    def get_definition(self, key: str) -> Definition:
        try:
            return self.data[key]
        except KeyError:
            raise NoDefinedFactory(key) from None

    def attributes(self, identifier: Identifier) -> dict[str, Any]:
        """Attributes of a model, grouped ones overlaying those of the bare type.

        Raises:
            NoDefinedFactory: the identifier itself was never defined.
        """
        definition = self.get_definition(identifier.key)
        if identifier.group is None:
            return dict(definition.attributes)
        base = self.data.get(identifier.type_name)
        attributes = dict(base.attributes) if base else {}
        attributes.update(definition.attributes)
        return attributes

    def callback(self, identifier: Identifier) -> Callback | None:
        if (definition := self.data.get(identifier.key)) and definition.callback:
            return definition.callback
        if identifier.group is not None and (base := self.data.get(identifier.type_name)):
            return base.callback
        return None


def split_name(name: str, delimiter: str = ":") -> Identifier:
    group, sep, type_name = name.partition(delimiter)
    if not sep:
        return Identifier(key=name, group=None, type_name=name)
    return Identifier(key=name, group=group, type_name=type_name)


def normalize_name(name: ModelName, delimiter: str = ":") -> tuple[str, type | None]:
    """Turn any model name into its string form.

    Returns:
        the string identifier and the model class, when one was given.
    """
    match name:
        case str():
            return name, None
        case type():
            return name.__name__, name
        case (type() as model, None):
            return model.__name__, model
        case (type() as model, str(group)):
            return f"{group}{delimiter}{model.__name__}", model
        case _:
            raise TypeError(f"invalid model name {name!r}")


@dataclass(kw_only=True, slots=True)
class DefinitionDSL:
    """Incremental definition of a factory.

    ```python
    with fx.definition("User") as factory:
        factory.set("name", Fake("name"))

        @factory.callback
        def _(instance, saved):
            instance.slug = instance.name.lower()
    ```
    """

    definition: Definition

    def set(self, attr: str, /, value: Any) -> None:
        """Set the kind of `attr`.

        Value may be anything, a kind or a literal.
        """
        self.definition.attributes[attr] = value

    def callback(self, func: Callback, /) -> Callback:
        """Register the callback, can be used as a decorator."""
        self.definition.callback = func
        return func

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        pass
