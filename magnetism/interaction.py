"""
Pointer input to world mutations.

The front end feeds raw pointer events into an InteractionHandler. A press
on an entity opens a Gesture, which registers move/up listeners on a
ListenerRegistry for exactly as long as the gesture lives: they are removed
on release, on cancel (lost pointer capture, lost focus) and when a new press
aborts a gesture that never saw its release.

A press that travels further than the drag threshold is a drag and moves the
entity; anything shorter is a click candidate. The click that follows a drag
is swallowed, so one gesture never both moves and toggles a magnet.
"""
import logging

import constants
from .Vec2 import Vec2
from .world import UnknownEntityError

MAGNET = 'magnet'
PARTICLE = 'particle'
ENTITY_KINDS = (MAGNET, PARTICLE)


def entity_under_cursor(world, x, y, include_particles=False):
    """
    Return the (kind, id) under the pointer, or None.

    Magnets are drawn above particles, and later entities above earlier
    ones, so the search runs in reverse draw order.
    """
    point = Vec2(x, y)
    for m in reversed(world.magnets):
        if m.contains(point):
            return MAGNET, m.id
    if include_particles:
        for p in reversed(world.particles):
            if p.contains(point):
                return PARTICLE, p.id
    return None


class ListenerRegistry:
    """Window-level pointer listeners, keyed by event name."""

    def __init__(self):
        self._listeners = {'move': [], 'up': []}

    def add(self, event, callback):
        self._listeners[event].append(callback)

    def remove(self, event, callback):
        if callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def dispatch(self, event, *args):
        for callback in list(self._listeners[event]):
            callback(*args)

    def count(self, event=None):
        if event is None:
            return sum(len(v) for v in self._listeners.values())
        return len(self._listeners[event])


class Gesture:
    """
    One press-move-release on an entity.

    Holds its listener registrations as a resource: open() acquires them,
    close() releases them and is safe to call more than once. Usable as a
    context manager when the whole gesture runs inside one block.
    """

    def __init__(self, registry, kind, entity_id, origin, offset, on_move, on_up):
        self.registry = registry
        self.kind = kind
        self.entity_id = entity_id
        self.origin = origin
        self.offset = offset
        self.dragged = False
        self._on_move = on_move
        self._on_up = on_up
        self._open = False

    @property
    def is_open(self):
        return self._open

    def open(self):
        if not self._open:
            self.registry.add('move', self._on_move)
            self.registry.add('up', self._on_up)
            self._open = True
        return self

    def close(self):
        if self._open:
            self.registry.remove('move', self._on_move)
            self.registry.remove('up', self._on_up)
            self._open = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return f"<Gesture {self.kind}={self.entity_id} dragged={self.dragged} open={self._open}>"


class InteractionHandler:
    def __init__(self, world, registry=None, drag_threshold=constants.DRAG_THRESHOLD,
                 particles_draggable=False):
        self.world = world
        self.registry = registry if registry is not None else ListenerRegistry()
        self.drag_threshold = float(drag_threshold)
        self.particles_draggable = particles_draggable
        self.gesture = None
        self._swallow_click = False

    @property
    def dragging(self):
        return self.gesture is not None and self.gesture.dragged

    def _position_of(self, kind, entity_id):
        entity = self.world.get_magnet(entity_id) if kind == MAGNET else self.world.get_particle(entity_id)
        return None if entity is None else entity.pos

    def pointer_down(self, entity, client_x, client_y):
        """Start a gesture on `entity`, a (kind, id) pair. Returns True if one was opened."""
        if self.gesture is not None:
            logging.debug(f"Aborting unfinished {self.gesture!r}.")
            self.cancel()
        self._swallow_click = False

        if entity is None:
            return False
        kind, entity_id = entity
        if kind not in ENTITY_KINDS:
            raise ValueError(f"unknown entity kind {kind!r}, expected one of {ENTITY_KINDS}")
        if kind == PARTICLE and not self.particles_draggable:
            return False

        pos = self._position_of(kind, entity_id)
        if pos is None:
            if self.world.strict:
                raise UnknownEntityError(f"no {kind} with id {entity_id!r}")
            logging.warning(f"Ignoring press on unknown {kind} id {entity_id!r}.")
            return False

        pointer = Vec2(client_x, client_y)
        self.gesture = Gesture(self.registry, kind, entity_id, origin=pointer, offset=pointer - pos,
                               on_move=self._on_move, on_up=self._on_up).open()
        logging.debug(f"Pointer down on {kind} {entity_id} at ({client_x}, {client_y}).")
        return True

    def pointer_move(self, client_x, client_y):
        self.registry.dispatch('move', client_x, client_y)

    def pointer_up(self):
        self.registry.dispatch('up')

    def cancel(self):
        """Drop the current gesture without a release, e.g. on lost pointer capture."""
        gesture = self.gesture
        if gesture is None:
            return
        gesture.close()
        self._swallow_click = gesture.dragged
        self.gesture = None

    def click(self, magnet_id):
        """Toggle a magnet, unless this click closes a drag. Returns True if toggled."""
        if self._swallow_click:
            self._swallow_click = False
            logging.debug(f"Click on magnet {magnet_id} ended a drag; not toggling.")
            return False
        self.world.toggle_magnet_active(magnet_id)
        return True

    def _on_move(self, client_x, client_y):
        gesture = self.gesture
        pointer = Vec2(client_x, client_y)
        if not gesture.dragged:
            if gesture.origin.distance_to(pointer) <= self.drag_threshold:
                return
            gesture.dragged = True
            logging.debug(f"Dragging {gesture.kind} {gesture.entity_id}.")

        target = pointer - gesture.offset
        if gesture.kind == MAGNET:
            self.world.set_magnet_position(gesture.entity_id, target.x, target.y)
        else:
            self.world.set_particle_position(gesture.entity_id, target.x, target.y)

    def _on_up(self):
        gesture = self.gesture
        gesture.close()
        self._swallow_click = gesture.dragged
        self.gesture = None
        if gesture.dragged:
            logging.debug(f"Dropped {gesture.kind} {gesture.entity_id}.")
