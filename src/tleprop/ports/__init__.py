# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for external collaborators.

Adapters implement these to plug in a concrete propagation engine.
"""
from tleprop.ports.propagation import PropagationEngine, Vec3

__all__ = ["PropagationEngine", "Vec3"]
