import math

import constants
from .Vec2 import Vec2


def nearest_active_magnet(particle, magnets):
    """
    Return (magnet, distance) for the closest active magnet, or (None, inf).

    Ties go to the magnet that comes first in `magnets`: a later magnet only
    wins with a strictly smaller distance.
    """
    best = None
    best_distance = math.inf
    for magnet in magnets:
        if not magnet.active:
            continue
        distance = particle.pos.distance_to(magnet.pos)
        if distance < best_distance:
            best = magnet
            best_distance = distance
    return best, best_distance


def attract(particle, magnets, pull_radius=constants.PULL_RADIUS, step_size=constants.STEP_SIZE):
    """
    Move a particle one step toward the nearest active magnet in range.

    The step has constant length regardless of distance, with no clamping at
    the magnet's centre, so a particle sitting on an active magnet keeps
    crossing over it. A particle exactly on the magnet has direction
    atan2(0, 0) = 0 and is nudged along +x.
    Returns the particle itself when it does not move.
    """
    magnet, distance = nearest_active_magnet(particle, magnets)
    if magnet is None or distance >= pull_radius:
        return particle

    target = particle.pos + Vec2.from_angle(particle.pos.angle_to(magnet.pos), step_size)
    return particle.moved_to(target.x, target.y)


def attraction_step(magnets, particles, pull_radius=constants.PULL_RADIUS, step_size=constants.STEP_SIZE):
    """
    One tick of the attraction rule over every particle.

    Pure: reads the given collections and returns a new tuple of particles,
    or the input tuple itself when nothing moved. Each particle is written
    at most once and there is no iteration to convergence.
    """
    # materialise so a generator of magnets is not exhausted by the first particle
    magnets = tuple(magnets)
    particles = tuple(particles)
    if not any(m.active for m in magnets):
        return particles

    moved = tuple(attract(p, magnets, pull_radius, step_size) for p in particles)
    if all(new is old for new, old in zip(moved, particles)):
        return particles
    return moved
