from .bases import Fixtory, MaybeOverrides
from .errors import (
    DeleteFailed,
    DeleteMethodNotFound,
    DeletingFailed,
    DirectoryNotFound,
    FixtoryError,
    ModelNotFound,
    NoDefinedFactory,
    SaveFailed,
    SaveMethodNotFound,
    UnknownGenerator,
)
from .generators import GenerationContext, Generator
from .hooks import Hooks, Settings
from .registry import Definition, DefinitionDSL
from .types import AttributeSpec, Callback, Instance, ModelName
from .values import Cycle, Fake, Invocable, Kind, Literal, NamedGenerator, RandomValue, Related, Sequence, Strategy

__all__ = [
    "attributes_for",
    "create",
    "define",
    "definition",
    "delete_saved",
    "instance",
    "load_factories",
    "seed",
    "AttributeSpec",
    "Callback",
    "Cycle",
    "DeleteFailed",
    "DeleteMethodNotFound",
    "DeletingFailed",
    "Definition",
    "DefinitionDSL",
    "DirectoryNotFound",
    "Fake",
    "Fixtory",
    "FixtoryError",
    "GenerationContext",
    "Generator",
    "Hooks",
    "Instance",
    "Invocable",
    "Kind",
    "Literal",
    "MaybeOverrides",
    "ModelName",
    "ModelNotFound",
    "NamedGenerator",
    "NoDefinedFactory",
    "RandomValue",
    "Related",
    "SaveFailed",
    "SaveMethodNotFound",
    "Sequence",
    "Settings",
    "Strategy",
    "UnknownGenerator",
]

_0: Fixtory = Fixtory()

attributes_for = _0.attributes_for
create = _0.create
define = _0.define
definition = _0.definition
delete_saved = _0.delete_saved
instance = _0.instance
load_factories = _0.load_factories
seed = _0.seed
DEFINITIONS = _0.definitions
FACTORY = _0

del _0
