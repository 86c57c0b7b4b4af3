import logging
import threading

import constants
from .Magnet import Magnet
from .Particle import Particle
from .attraction import attraction_step

# --- Data Contracts ---
#
# class World:
#   - Holds the authoritative magnet and particle collections as tuples.
#   - Every effective mutation installs a new tuple and bumps `version`,
#     so observers can compare collections instead of inspecting entities.
#   - Mutations naming an unknown id are logged no-ops, or raise
#     UnknownEntityError when the world is strict.
#   - update() is the explicit tick. It never recurses: a call made while a
#     tick is running only sets `tick_pending` for the scheduler.


class UnknownEntityError(LookupError):
    """Raised by a strict World when a mutation names an id it does not hold."""


def initial_magnets():
    return tuple(Magnet.from_dict(d) for d in constants.INITIAL_MAGNETS)


def initial_particles():
    return tuple(Particle.from_dict(d) for d in constants.INITIAL_PARTICLES)


class World:
    def __init__(self, magnets=None, particles=None,
                 pull_radius=constants.PULL_RADIUS, step_size=constants.STEP_SIZE, strict=False):
        self.pull_radius = float(pull_radius)
        self.step_size = float(step_size)
        self.strict = strict

        self._magnets = self._unique(initial_magnets() if magnets is None else magnets, 'magnet')
        self._particles = self._unique(initial_particles() if particles is None else particles, 'particle')

        # one writer at a time, also when a renderer thread reads snapshots
        self._lock = threading.RLock()
        self._observers = []
        self._ticking = False
        self.tick_pending = False
        self.tick_count = 0
        self.version = 0

        logging.info(
            f"World initialized with {len(self._magnets)} magnets and {len(self._particles)} particles "
            f"(pull radius {self.pull_radius}, step {self.step_size})."
        )

    @staticmethod
    def _unique(entities, kind):
        entities = tuple(entities)
        seen = set()
        for e in entities:
            if e.id in seen:
                raise ValueError(f"duplicate {kind} id {e.id!r}")
            seen.add(e.id)
        return entities

    @property
    def magnets(self):
        return self._magnets

    @property
    def particles(self):
        return self._particles

    def get_magnet(self, magnet_id):
        return next((m for m in self._magnets if m.id == magnet_id), None)

    def get_particle(self, particle_id):
        return next((p for p in self._particles if p.id == particle_id), None)

    # --- observers ---

    def subscribe(self, callback):
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback):
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self):
        for callback in list(self._observers):
            callback(self)

    # --- mutations ---

    def _unknown(self, kind, entity_id):
        if self.strict:
            raise UnknownEntityError(f"no {kind} with id {entity_id!r}")
        logging.warning(f"Ignoring mutation of unknown {kind} id {entity_id!r}.")

    def _replace(self, entities, entity_id, change, kind):
        """Return a new tuple with the matching entity replaced, or None if absent/unchanged."""
        for i, entity in enumerate(entities):
            if entity.id == entity_id:
                new = change(entity)
                if new == entity:
                    return None
                return entities[:i] + (new,) + entities[i + 1:]
        self._unknown(kind, entity_id)
        return None

    def set_magnet_position(self, magnet_id, x, y):
        with self._lock:
            magnets = self._replace(self._magnets, magnet_id, lambda m: m.moved_to(x, y), 'magnet')
            if magnets is None:
                return
            self._magnets = magnets
            self.version += 1
        self._notify()

    def set_particle_position(self, particle_id, x, y):
        with self._lock:
            particles = self._replace(self._particles, particle_id, lambda p: p.moved_to(x, y), 'particle')
            if particles is None:
                return
            self._particles = particles
            self.version += 1
        self._notify()

    def toggle_magnet_active(self, magnet_id):
        with self._lock:
            magnets = self._replace(self._magnets, magnet_id, lambda m: m.toggled(), 'magnet')
            if magnets is None:
                return
            self._magnets = magnets
            self.version += 1
        logging.info(f"Magnet {magnet_id} {'activated' if self.get_magnet(magnet_id).active else 'deactivated'}.")
        self._notify()

    def set_magnet_active(self, magnet_id, active):
        with self._lock:
            magnets = self._replace(self._magnets, magnet_id, lambda m: m.with_active(active), 'magnet')
            if magnets is None:
                return
            self._magnets = magnets
            self.version += 1
        logging.info(f"Magnet {magnet_id} {'activated' if active else 'deactivated'}.")
        self._notify()

    def reset(self):
        magnets = initial_magnets()
        particles = initial_particles()
        with self._lock:
            self._magnets = magnets
            self._particles = particles
            self.version += 1
        logging.info("World reset to the initial configuration.")
        self._notify()

    # --- tick ---

    def update(self):
        """
        Run one attraction pass and install the result.

        Returns the number of particles that moved. Re-entrant calls (an
        observer ticking from inside its notification) return 0 and leave
        `tick_pending` set so the scheduler runs them as the next tick.
        """
        if self._ticking:
            self.tick_pending = True
            logging.debug("Re-entrant tick deferred to the next frame.")
            return 0

        self._ticking = True
        self.tick_pending = False
        try:
            with self._lock:
                old = self._particles
                new = attraction_step(self._magnets, old, self.pull_radius, self.step_size)
                moved = 0 if new is old else sum(1 for a, b in zip(new, old) if a is not b)
                if moved:
                    self._particles = new
                    self.version += 1
                self.tick_count += 1
            if moved:
                self._notify()
        finally:
            self._ticking = False
        return moved

    # --- output ---

    def snapshot(self):
        with self._lock:
            return {
                'magnets': [m.to_dict() for m in self._magnets],
                'particles': [p.to_dict() for p in self._particles],
            }

    def draw(self, screen):
        for p in self._particles:
            p.draw(screen)
        # magnets sit above particles, matching the hit-test order
        for m in self._magnets:
            m.draw(screen)

    def __repr__(self):
        return f"<World magnets={len(self._magnets)} particles={len(self._particles)} version={self.version}>"
