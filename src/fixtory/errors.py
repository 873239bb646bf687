from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class FixtoryError(Exception):
    """Base class of every error raised by fixtory."""


@dataclass(eq=False)
class DirectoryNotFound(FixtoryError):
    path: str

    def __str__(self) -> str:
        return f"The directory {self.path!r} was not found"


@dataclass(eq=False)
class ModelNotFound(FixtoryError):
    model: str

    def __str__(self) -> str:
        return f"No model named {self.model!r} could be found"


@dataclass(eq=False)
class NoDefinedFactory(FixtoryError):
    model: str

    def __str__(self) -> str:
        return f"No factory was defined for {self.model!r}"


@dataclass(eq=False)
class SaveMethodNotFound(FixtoryError):
    instance: Any
    method: str

    def __str__(self) -> str:
        return f"{type(self.instance).__name__} has no method {self.method!r} to save it"


@dataclass(eq=False)
class DeleteMethodNotFound(FixtoryError):
    instance: Any
    method: str

    def __str__(self) -> str:
        return f"{type(self.instance).__name__} has no method {self.method!r} to delete it"


@dataclass(eq=False)
class SaveFailed(FixtoryError):
    model: str
    errors: Any = None
    """Validation details exposed by the instance, if any"""

    def __str__(self) -> str:
        if self.errors:
            return f"Could not save {self.model}: {self.errors}"
        return f"Could not save {self.model}"


@dataclass(eq=False)
class DeleteFailed(FixtoryError):
    model: str
    instance: Any = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"Could not delete {self.model}"


@dataclass(eq=False)
class DeletingFailed(FixtoryError):
    exceptions: list[Exception]
    """Underlying failures, in the order they were encountered"""

    def __str__(self) -> str:
        count = len(self.exceptions)
        details = "; ".join(str(exc) for exc in self.exceptions)
        return f"We encountered {count} problem(s) while deleting saved objects: {details}"


@dataclass(eq=False)
class UnknownGenerator(FixtoryError):
    name: str

    def __str__(self) -> str:
        return f"No generator registered under {self.name!r}"
