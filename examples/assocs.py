from __future__ import annotations

from dataclasses import dataclass

from fixtory import FACTORY, Related, Strategy, define, instance, attributes_for


@dataclass
class Vehicle:
    brand: str | None = None
    motor: Motor | None = None


@dataclass
class Motor:
    fuel: str | None = None


define(Vehicle, {"brand": "Mercedes", "motor": Related(Motor, strategy=Strategy.BUILD)})
define(Motor, {"fuel": "unleaded petrol"})


vehicle = instance(Vehicle)
print(vehicle)


attrs = attributes_for(Vehicle(), {"brand": "Volvo"})
print(attrs)
print(FACTORY.saved())
