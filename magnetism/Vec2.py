import math


class Vec2:
    """Immutable 2D point/vector used for entity positions."""

    __slots__ = ('x', 'y')

    def __init__(self, x, y):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Vec2 is immutable; build a new one instead")

    @classmethod
    def from_angle(cls, angle, length=1.0):
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def distance_to(self, other):
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other):
        # atan2(0, 0) is 0, so a coincident point points along +x
        return math.atan2(other.y - self.y, other.x - self.x)

    def as_int_tuple(self):
        return int(round(self.x)), int(round(self.y))

    def __eq__(self, other):
        if other is None or not isinstance(other, Vec2):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Vec2({self.x:.2f}, {self.y:.2f})"
