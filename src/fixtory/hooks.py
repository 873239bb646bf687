from __future__ import annotations

from dataclasses import dataclass, field
from importlib import import_module
from typing import Any, Callable, TypeAlias

from .errors import DeleteMethodNotFound, ModelNotFound, SaveMethodNotFound
from .types import Instance

Maker: TypeAlias = Callable[[str], Instance]
"""Instantiate a model by its type name."""

Setter: TypeAlias = Callable[[Instance, str, Any], Any]
"""Assign one attribute value on an instance."""

Saver: TypeAlias = Callable[[Instance], Any]
"""Persist an instance. A falsy result tells the save failed."""

Deleter: TypeAlias = Callable[[Instance], Any]
"""Delete an instance. A falsy result tells the deletion failed."""


@dataclass(kw_only=True)
class Settings:
    save_method: str = "save"
    """Method called on instances when no custom saver is set"""
    delete_method: str = "delete"
    """Method called on instances when no custom deleter is set"""
    locale: str = "en_US"
    """Locale of the faker instance"""
    seed: int | None = None
    """When set, seeds the faker instance"""
    group_delimiter: str = ":"


@dataclass(kw_only=True, slots=True)
class Models:
    """Model classes known by their type name."""

    classes: dict[str, type] = field(default_factory=dict)

    def register(self, model: type, name: str | None = None) -> str:
        name = name or model.__name__
        self.classes[name] = model
        return name

    def resolve(self, name: str) -> type:
        try:
            return self.classes[name]
        except KeyError:
            pass
        module_name, _, attr = name.rpartition(".")
        if module_name:
            try:
                model = getattr(import_module(module_name), attr)
            except (ImportError, AttributeError):
                pass
            else:
                if isinstance(model, type):
                    return model
        raise ModelNotFound(name)


@dataclass(kw_only=True)
class Hooks:
    """Construction and persistence strategies.

    Every hook left to `None` falls back to its conventional behavior.
    """

    maker: Maker | None = None
    setter: Setter | None = None
    saver: Saver | None = None
    deleter: Deleter | None = None

    def make(self, type_name: str, models: Models) -> Instance:
        if self.maker:
            return self.maker(type_name)
        model = models.resolve(type_name)
        return model()

    def set(self, instance: Instance, name: str, value: Any) -> None:
        if self.setter:
            self.setter(instance, name, value)
        else:
            setattr(instance, name, value)

    def save(self, instance: Instance, method: str) -> Any:
        if self.saver:
            return self.saver(instance)
        save = getattr(instance, method, None)
        if not callable(save):
            raise SaveMethodNotFound(instance, method)
        return save()

    def delete(self, instance: Instance, method: str) -> Any:
        if self.deleter:
            return self.deleter(instance)
        delete = getattr(instance, method, None)
        if not callable(delete):
            raise DeleteMethodNotFound(instance, method)
        return delete()
