"""
Unit tests for the attraction rule.

Covers nearest-magnet selection, the pull radius cutoff, the fixed step,
the tie-break on equal distances and the coincident-position nudge.
"""

import math

import pytest

import constants
from magnetism.Magnet import Magnet
from magnetism.Particle import Particle
from magnetism.Vec2 import Vec2
from magnetism.attraction import attract, attraction_step, nearest_active_magnet


def active(id, x, y):
    return Magnet(id, Vec2(x, y), active=True)


def inactive(id, x, y):
    return Magnet(id, Vec2(x, y), active=False)


class TestNearestActiveMagnet:
    """Test suite for nearest_active_magnet"""

    def test_no_magnets(self) -> None:
        """Test that an empty collection yields no magnet"""
        magnet, distance = nearest_active_magnet(Particle(1, (0, 0)), [])

        assert magnet is None
        assert distance == math.inf

    def test_ignores_inactive_magnets(self) -> None:
        """Test that inactive magnets are skipped even when closer"""
        magnets = [inactive(1, 1, 0), active(2, 50, 0)]
        magnet, distance = nearest_active_magnet(Particle(1, (0, 0)), magnets)

        assert magnet.id == 2
        assert distance == pytest.approx(50.0)

    def test_picks_closest(self) -> None:
        """Test that the minimum distance wins"""
        magnets = [active(1, 100, 0), active(2, 0, 30), active(3, -60, 0)]
        magnet, distance = nearest_active_magnet(Particle(1, (0, 0)), magnets)

        assert magnet.id == 2
        assert distance == pytest.approx(30.0)

    def test_tie_goes_to_first_in_order(self) -> None:
        """Test that equidistant magnets resolve to the earlier one"""
        first, _ = nearest_active_magnet(Particle(1, (0, 0)), [active(1, 10, 0), active(2, -10, 0)])
        second, _ = nearest_active_magnet(Particle(1, (0, 0)), [active(2, -10, 0), active(1, 10, 0)])

        assert first.id == 1
        assert second.id == 2


class TestAttract:
    """Test suite for the single-particle rule"""

    def test_moves_step_toward_magnet_in_range(self) -> None:
        """Test a 2 unit move along the line to the magnet"""
        p = Particle(1, (0, 0))
        moved = attract(p, [active(1, 30, 40)])

        assert moved.x == pytest.approx(2 * 30 / 50)
        assert moved.y == pytest.approx(2 * 40 / 50)
        assert p.pos.distance_to(moved.pos) == pytest.approx(constants.STEP_SIZE)

    def test_out_of_range_does_not_move(self) -> None:
        """Test that a magnet exactly at the pull radius has no effect"""
        p = Particle(1, (0, 0))

        assert attract(p, [active(1, 200, 0)]) is p
        assert attract(p, [active(1, 300, 400)]) is p

    def test_just_inside_range_moves(self) -> None:
        """Test that a magnet just inside the radius pulls"""
        moved = attract(Particle(1, (0, 0)), [active(1, 199.99, 0)])

        assert moved.pos == Vec2(2, 0)

    def test_only_nearest_magnet_counts(self) -> None:
        """Test that a farther magnet does not add to the pull"""
        moved = attract(Particle(1, (0, 0)), [active(1, 0, 100), active(2, 50, 0)])

        assert moved.x == pytest.approx(2.0)
        assert moved.y == pytest.approx(0.0, abs=1e-12)

    def test_nearest_out_of_range_blocks_nothing_else(self) -> None:
        """Test that the range check applies to the nearest active magnet"""
        p = Particle(1, (0, 0))

        assert attract(p, [active(1, 250, 0), inactive(2, 10, 0)]) is p

    def test_zero_distance_nudges_along_positive_x(self) -> None:
        """Test the coincident case: atan2(0, 0) = 0"""
        moved = attract(Particle(1, (100, 100)), [active(1, 100, 100)])

        assert moved.pos == Vec2(102, 100)

    def test_oscillates_across_magnet(self) -> None:
        """Test that there is no stopping condition at the magnet"""
        magnets = [active(1, 100, 100)]
        p = Particle(1, (101, 100))

        p = attract(p, magnets)
        assert p.x == pytest.approx(99.0)
        p = attract(p, magnets)
        assert p.x == pytest.approx(101.0)

    def test_custom_radius_and_step(self) -> None:
        """Test that radius and step are parameters"""
        p = Particle(1, (0, 0))

        assert attract(p, [active(1, 50, 0)], pull_radius=40) is p
        assert attract(p, [active(1, 50, 0)], step_size=5).pos == Vec2(5, 0)


class TestAttractionStep:
    """Test suite for the whole-tick step"""

    @pytest.fixture
    def particles(self) -> tuple:
        return (Particle(1, (400, 400)), Particle(2, (600, 150)))

    def test_no_active_magnets_returns_same_tuple(self, particles: tuple) -> None:
        """Test that nothing moves and no new collection is built"""
        magnets = (inactive(1, 400, 410), inactive(2, 600, 160))

        assert attraction_step(magnets, particles) is particles

    def test_all_out_of_range_returns_same_tuple(self, particles: tuple) -> None:
        """Test that an active but distant magnet changes nothing"""
        assert attraction_step((active(1, 0, 0),), particles) is particles

    def test_moves_each_particle_independently(self, particles: tuple) -> None:
        """Test that each particle follows its own nearest magnet"""
        magnets = (active(1, 400, 450), active(2, 650, 150))
        moved = attraction_step(magnets, particles)

        assert moved is not particles
        assert moved[0].pos.x == pytest.approx(400.0)
        assert moved[0].pos.y == pytest.approx(402.0)
        assert moved[1].pos.x == pytest.approx(602.0)
        assert moved[1].pos.y == pytest.approx(150.0)

    def test_unmoved_particles_are_kept(self, particles: tuple) -> None:
        """Test that only particles in range are replaced"""
        moved = attraction_step((active(1, 600, 100),), particles)

        assert moved[0] is particles[0]
        assert moved[1] is not particles[1]

    def test_does_not_change_magnets(self, particles: tuple) -> None:
        """Test that the magnets are read only"""
        magnets = (active(1, 400, 450),)
        before = tuple(m.to_dict() for m in magnets)
        attraction_step(magnets, particles)

        assert tuple(m.to_dict() for m in magnets) == before

    def test_accepts_generators(self, particles: tuple) -> None:
        """Test that a generator of magnets is usable for every particle"""
        magnets = (m for m in [active(1, 400, 450), active(2, 650, 150)])
        moved = attraction_step(magnets, particles)

        assert moved[0] is not particles[0]
        assert moved[1] is not particles[1]

    def test_one_step_per_call(self, particles: tuple) -> None:
        """Test that a call is a single bounded pass"""
        magnets = (active(1, 400, 450),)
        moved = attraction_step(magnets, particles)

        assert particles[0].pos.distance_to(moved[0].pos) == pytest.approx(constants.STEP_SIZE)
