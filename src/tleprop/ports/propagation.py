# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the external SGP4 propagation engine.

Adapters own the engine state; the domain only holds it as an opaque
handle and passes it back on every call.
"""
from typing import Any, Protocol, runtime_checkable

from tleprop.domain.elements import ElementRecord, GravityModel

Vec3 = tuple[float, float, float]


@runtime_checkable
class PropagationEngine(Protocol):
    """Port for initializing and running an SGP4 implementation."""

    def initialize(
        self, gravity_model: GravityModel, record: ElementRecord,
    ) -> tuple[Any, int]:
        """
        Initialize engine state from a record. Returns (handle, error code).

        A None handle means the record could not be handed to the engine;
        it is never passed to propagate().
        """
        ...

    def propagate(
        self, handle: Any, minutes_since_epoch: float,
    ) -> tuple[int, Vec3, Vec3]:
        """Propagate. Returns (error code, position km, velocity km/s)."""
        ...

    def gravitational_parameter(self, gravity_model: GravityModel) -> float:
        """Earth gravitational parameter of a model, km³/s²."""
        ...
