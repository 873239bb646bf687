from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Iterable, Mapping, Self

from faker import Faker
from typing_extensions import Doc  # type: ignore[attr-defined]

from .errors import DeleteFailed, DeletingFailed, NoDefinedFactory, SaveFailed
from .generators import Dispatcher, FakerProvider, Generator, Generators, default_generators
from .hooks import Deleter, Hooks, Maker, Models, Saver, Setter, Settings
from .loader import load_factories
from .registry import Definitions, DefinitionDSL, Identifier, normalize_name, split_name
from .tracker import IdentityMap, Lifecycle
from .types import AttributeSpec, Callback, Instance, ModelName

logger = logging.getLogger(__name__)

MaybeOverrides = Mapping[str, Any] | None


@dataclass(kw_only=True)
class Fixtory:
    """Build model instances populated with generated values, persist them
    and keep track of them until they are deleted.
    """

    definitions: Definitions = field(default_factory=Definitions)
    settings: Settings = field(default_factory=Settings)
    hooks: Hooks = field(default_factory=Hooks)
    models: Models = field(default_factory=Models)
    generators: Generators = field(default_factory=default_generators)
    lifecycle: Lifecycle = field(default_factory=Lifecycle, repr=False)

    def __post_init__(self) -> None:
        self.faker_provider = FakerProvider(self.settings.locale, self.settings.seed)
        self.dispatcher = Dispatcher(self, self.generators, self.faker_provider)
        # bare identifiers of registered model classes
        self.identifiers: dict[type, str] = {}
        # bare identifier each built instance comes from
        self.origins: IdentityMap[str] = IdentityMap()

    # definitions

    def define(
        self,
        model: ModelName,
        attributes: Annotated[
            AttributeSpec | None,
            Doc(
                """
                Kind of each attribute, by attribute name. Values that are not kinds are literals.
                """
            ),
        ] = None,
        callback: Annotated[
            Callback | None,
            Doc(
                """
                Called with the instance and whether it is pending or saved,
                after it is built and before it is saved again by ``create``.
                """
            ),
        ] = None,
    ) -> Self:
        """Define a new model factory, overwriting any previous definition.

        ```python
        fx.define(User, {"name": Fake("name"), "admin": False})
        fx.define("admin:User", {"admin": True})
        ```
        """
        key = self._register(model)
        self.definitions.define(key, attributes, callback)
        logger.debug("defined factory %s", key)
        return self

    def definition(self, model: ModelName) -> DefinitionDSL:
        """Define a new model factory incrementally.

        Returns:
            The definition of factory
        """
        key = self._register(model)
        definition = self.definitions.define(key)
        logger.debug("defined factory %s", key)
        return DefinitionDSL(definition=definition)

    def register_model(self, model: type, name: str | None = None) -> Self:
        """Make a model class constructible by name."""
        name = self.models.register(model, name)
        self.identifiers[model] = name
        return self

    def _register(self, model: ModelName) -> str:
        key, model_class = normalize_name(model, self.settings.group_delimiter)
        if model_class is not None:
            self.register_model(model_class)
        return key

    def load_factories(
        self,
        paths: Annotated[
            str | Path | Iterable[str | Path],
            Doc(
                """
                One directory or many. Every python file found under them is executed,
                with this instance available as the global ``factory``.
                """
            ),
        ],
    ) -> Self:
        load_factories(paths, self)
        return self

    # configuration

    def set_save_method(self, method: str) -> Self:
        self.settings.save_method = method
        return self

    def set_delete_method(self, method: str) -> Self:
        self.settings.delete_method = method
        return self

    def set_custom_maker(self, maker: Maker | None) -> Self:
        self.hooks.maker = maker
        return self

    def set_custom_setter(self, setter: Setter | None) -> Self:
        self.hooks.setter = setter
        return self

    def set_custom_saver(self, saver: Saver | None) -> Self:
        self.hooks.saver = saver
        return self

    def set_custom_deleter(self, deleter: Deleter | None) -> Self:
        self.hooks.deleter = deleter
        return self

    def set_locale(self, locale: str) -> Self:
        """Set the faker locale, faker is instantiated again on next use."""
        self.settings.locale = locale
        self.faker_provider.locale = locale
        return self

    def set_seed(self, seed: int | None) -> Self:
        self.settings.seed = seed
        self.faker_provider.seed = seed
        return self

    def register_generator(self, name: str, generator: Generator) -> Self:
        self.generators[name] = generator
        return self

    def get_faker(self) -> Faker:
        return self.faker_provider.get()

    # building

    def instance(self, model: ModelName, overrides: MaybeOverrides = None) -> Instance:
        """Build one model instance, without saving it.

        ```python
        user = fx.instance(User)
        assert not fx.is_pending_or_saved(user)
        ```
        """
        identifier = self._identify(model)
        instance = self._make(identifier, overrides, save=False)
        self._trigger_callback(identifier, instance)
        return instance

    def create(self, model: ModelName, overrides: MaybeOverrides = None) -> Instance:
        """Create one model instance and save it.

        When a callback is defined, the instance is saved again after it.

        ```python
        user = fx.create(User)
        assert fx.is_saved(user)
        ```

        Raises:
            SaveFailed: the saver reported a failure. The instance stays pending.
        """
        identifier = self._identify(model)
        instance = self._make(identifier, overrides, save=True)
        self._persist(identifier, instance)
        if self._trigger_callback(identifier, instance):
            self._persist(identifier, instance)
        return instance

    def seed(self, times: int, model: ModelName, overrides: MaybeOverrides = None) -> list[Instance]:
        """Create many model instances, one after the other.

        ```python
        user1, user2 = fx.seed(2, User)
        ```
        """
        return [self.create(model, overrides) for _ in range(times)]

    def attributes_for(
        self,
        instance: Instance,
        overrides: MaybeOverrides = None,
        *,
        model: Annotated[
            ModelName | None,
            Doc(
                """
                Identifier of the definition to use.

                When not set, fallback to the bare identifier the instance was built from,
                or the one of its class when it was registered.
                """
            ),
        ] = None,
    ) -> dict[str, Any]:
        """Generate the attributes of an instance and assign them.

        Returns:
            The generated values, by attribute name
        """
        if model is None:
            model = self.origins.get(instance) or self.identifiers.get(type(instance))
            if model is None:
                raise NoDefinedFactory(type(instance).__name__)
        identifier = self._identify(model)
        return self._fill(instance, self.definitions.attributes(identifier), overrides)

    def generate_attr(self, kind: Any, instance: Instance | None = None) -> Any:
        return self.dispatcher.generate(kind, instance)

    def _identify(self, model: ModelName) -> Identifier:
        key = self._register(model)
        return split_name(key, self.settings.group_delimiter)

    def _make(self, identifier: Identifier, overrides: MaybeOverrides, *, save: bool) -> Instance:
        attributes = self.definitions.attributes(identifier)
        instance = self.hooks.make(identifier.type_name, self.models)
        logger.debug("built %s", identifier.key)
        self.origins.set(instance, identifier.type_name)
        # related objects follow the pending state of their owner
        if save:
            self.lifecycle.mark_pending(instance)
        self._fill(instance, attributes, overrides)
        return instance

    def _fill(self, instance: Instance, attributes: dict[str, Any], overrides: MaybeOverrides) -> dict[str, Any]:
        attributes = attributes | dict(overrides or {})
        values: dict[str, Any] = {}
        for attr, kind in attributes.items():
            values[attr] = value = self.generate_attr(kind, instance)
            self.hooks.set(instance, attr, value)
        return values

    def _trigger_callback(self, identifier: Identifier, instance: Instance) -> bool:
        if callback := self.definitions.callback(identifier):
            callback(instance, self.is_pending_or_saved(instance))
            return True
        return False

    def _persist(self, identifier: Identifier, instance: Instance) -> None:
        if not self.hooks.save(instance, self.settings.save_method):
            errors = getattr(instance, "validation_errors", None)
            raise SaveFailed(identifier.type_name, errors or None)
        self.lifecycle.mark_saved(instance)
        logger.debug("saved %s", identifier.key)

    # tracking

    def pending(self) -> list[Instance]:
        """Objects built by ``create`` that are not saved yet."""
        return list(self.lifecycle.pending)

    def saved(self) -> list[Instance]:
        return list(self.lifecycle.saved)

    def is_pending(self, instance: Instance) -> bool:
        return self.lifecycle.is_pending(instance)

    def is_saved(self, instance: Instance) -> bool:
        return self.lifecycle.is_saved(instance)

    def is_pending_or_saved(self, instance: Instance) -> bool:
        return self.lifecycle.is_pending_or_saved(instance)

    def delete_saved(self) -> Self:
        """Delete every saved object, the most recently saved first.

        Every saved object is attempted and stops being tracked,
        whether its deletion succeeded or not.

        Raises:
            DeletingFailed: once all objects are processed, if any deletion failed.
        """
        exceptions: list[Exception] = []
        for instance in reversed(self.lifecycle.saved):
            try:
                if not self.hooks.delete(instance, self.settings.delete_method):
                    raise DeleteFailed(type(instance).__name__, instance)
            except Exception as error:
                logger.warning("could not delete %r: %s", instance, error)
                exceptions.append(error)
            finally:
                self.lifecycle.forget(instance)
                self.origins.discard(instance)

        if exceptions:
            raise DeletingFailed(exceptions)
        return self
