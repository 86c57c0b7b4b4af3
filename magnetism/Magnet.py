import pygame

import constants
from .Vec2 import Vec2

POLARITIES = (constants.NORTH, constants.SOUTH)

_label_font = None


def _font():
    global _label_font
    if _label_font is None:
        _label_font = pygame.font.Font(None, 36)
    return _label_font


class Magnet:
    """
    A draggable attraction source.

    Magnets are treated as values: dragging or toggling one produces a new
    Magnet through moved_to()/toggled() and the world swaps it in.
    Polarity and rotation are carried for display only; the attraction rule
    looks at position and the active flag.
    """

    def __init__(self, id, pos, polarity=constants.NORTH, active=False, rotation=0.0,
                 radius=constants.MAGNET_RADIUS):
        if polarity not in POLARITIES:
            raise ValueError(f"unknown polarity {polarity!r}, expected one of {POLARITIES}")
        self.id = id
        self.pos = pos if isinstance(pos, Vec2) else Vec2(pos[0], pos[1])
        self.polarity = polarity
        self.active = bool(active)
        self.rotation = float(rotation)
        self.radius = radius

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['id'],
            Vec2(data['x'], data['y']),
            polarity=data.get('polarity', constants.NORTH),
            active=data.get('active', False),
            rotation=data.get('rotation', 0.0),
        )

    @property
    def x(self):
        return self.pos.x

    @property
    def y(self):
        return self.pos.y

    def moved_to(self, x, y):
        return Magnet(self.id, Vec2(x, y), self.polarity, self.active, self.rotation, self.radius)

    def toggled(self):
        return self.with_active(not self.active)

    def with_active(self, active):
        return Magnet(self.id, self.pos, self.polarity, active, self.rotation, self.radius)

    def contains(self, point):
        return self.pos.distance_to(point) <= self.radius

    def to_dict(self):
        return {
            'id': self.id,
            'x': self.pos.x,
            'y': self.pos.y,
            'polarity': self.polarity,
            'active': self.active,
            'rotation': self.rotation,
        }

    def draw(self, screen):
        center = self.pos.as_int_tuple()
        color = constants.NORTH_COLOR if self.polarity == constants.NORTH else constants.SOUTH_COLOR
        shadow = (center[0], center[1] + 4)
        pygame.draw.circle(screen, constants.SHADOW, shadow, self.radius)
        pygame.draw.circle(screen, color, center, self.radius)
        if self.active:
            pygame.draw.circle(screen, constants.ACTIVE_RING, center, self.radius + 4, 4)
        label = 'N' if self.polarity == constants.NORTH else 'S'
        surf = _font().render(label, True, constants.WHITE)
        screen.blit(surf, surf.get_rect(center=center))

    def __eq__(self, other):
        if other is None or not isinstance(other, Magnet):
            return False
        return (self.id == other.id and self.pos == other.pos and self.polarity == other.polarity
                and self.active == other.active and self.rotation == other.rotation)

    def __hash__(self):
        return hash((self.id, self.pos, self.polarity, self.active, self.rotation))

    def __repr__(self):
        return (f"Magnet(id={self.id}, pos=({self.pos.x:.2f}, {self.pos.y:.2f}), "
                f"polarity={self.polarity}, active={self.active})")

    def __str__(self):
        return self.__repr__()
