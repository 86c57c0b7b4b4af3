"""
Magnet playground

Draggable magnets pull nearby metal particles toward them, one fixed-size
step per tick.
"""

from magnetism.Vec2 import Vec2
from magnetism.Magnet import Magnet
from magnetism.Particle import Particle
from magnetism.attraction import attract, attraction_step, nearest_active_magnet
from magnetism.world import UnknownEntityError, World
from magnetism.interaction import Gesture, InteractionHandler, ListenerRegistry, entity_under_cursor

__all__ = [
    "Vec2",
    "Magnet",
    "Particle",
    "attract",
    "attraction_step",
    "nearest_active_magnet",
    "UnknownEntityError",
    "World",
    "Gesture",
    "InteractionHandler",
    "ListenerRegistry",
    "entity_under_cursor",
]
