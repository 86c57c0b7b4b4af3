import pygame

import constants
from .Vec2 import Vec2


class Particle:
    """A passive metal object; only its position changes during a session."""

    def __init__(self, id, pos, radius=constants.METAL_RADIUS):
        self.id = id
        self.pos = pos if isinstance(pos, Vec2) else Vec2(pos[0], pos[1])
        self.radius = radius

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], Vec2(data['x'], data['y']))

    @property
    def x(self):
        return self.pos.x

    @property
    def y(self):
        return self.pos.y

    def moved_to(self, x, y):
        return Particle(self.id, Vec2(x, y), self.radius)

    def contains(self, point):
        return self.pos.distance_to(point) <= self.radius

    def to_dict(self):
        return {'id': self.id, 'x': self.pos.x, 'y': self.pos.y}

    def draw(self, screen):
        center = self.pos.as_int_tuple()
        pygame.draw.circle(screen, constants.SHADOW, (center[0], center[1] + 3), self.radius)
        pygame.draw.circle(screen, constants.METAL_COLOR, center, self.radius)

    def __eq__(self, other):
        if other is None or not isinstance(other, Particle):
            return False
        return self.id == other.id and self.pos == other.pos

    def __hash__(self):
        return hash((self.id, self.pos))

    def __repr__(self):
        return f"Particle(id={self.id}, pos=({self.pos.x:.2f}, {self.pos.y:.2f}))"

    def __str__(self):
        return self.__repr__()
