# vehicle_capabilities.py
from typing import Protocol, runtime_checkable


@runtime_checkable
class Drivable(Protocol):
    def drive(self): ...

    def stop_driving(self): ...


@runtime_checkable
class Flyable(Protocol):
    def take_off(self): ...

    def fly(self): ...

    def land(self): ...
