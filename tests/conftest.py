from __future__ import annotations

from typing import Iterator

import pytest

from fixtory import DEFINITIONS, FACTORY
from fixtory.bases import Fixtory
from fixtory.generators import Dispatcher, FakerProvider, default_generators
from fixtory.hooks import Hooks, Models, Settings
from fixtory.tracker import IdentityMap, Lifecycle


@pytest.fixture(name="fx")
def fx_fixture() -> Fixtory:
    return Fixtory()


@pytest.fixture(autouse=True)
def _teardown_fixture() -> Iterator[None]:
    yield
    DEFINITIONS.clear()
    FACTORY.settings = Settings()
    FACTORY.hooks = Hooks()
    FACTORY.models = Models()
    FACTORY.generators = default_generators()
    FACTORY.lifecycle = Lifecycle()
    FACTORY.identifiers = {}
    FACTORY.origins = IdentityMap()
    FACTORY.faker_provider = FakerProvider(FACTORY.settings.locale, FACTORY.settings.seed)
    FACTORY.dispatcher = Dispatcher(FACTORY, FACTORY.generators, FACTORY.faker_provider)
