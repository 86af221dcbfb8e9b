"""
Unit tests for the Neon Missile Defense models and helpers.

Covers geometry and wave formulas, structures and ammo, missile motion,
explosion growth/decay, and the entity registry.
"""

import pytest

from neondefense.bridges import VisualKind
from neondefense.config import (
    DEFENSE_GROWTH,
    EXPLOSION_SHRINK_FACTOR,
    MAX_BASE_AMMO,
    STRUCTURE_Y,
    WORLD_BOTTOM,
    WORLD_LEFT,
    WORLD_RIGHT,
    WORLD_TOP,
)
from neondefense.models.city import City, build_cities
from neondefense.models.defense import LaunchBase, build_bases, pick_launch_base
from neondefense.models.explosion import Explosion, ExplosionKind
from neondefense.models.missile import (
    EnemyMissile,
    PlayerMissile,
    Target,
    TargetKind,
)
from neondefense.models.registry import EntityRegistry
from neondefense.utils.functions import (
    calculate_wave_bonus,
    clamp,
    clamp_aim_point,
    distance_2d,
    get_enemy_count,
    get_spawn_rate,
    get_split_probability,
    lerp_point,
)


# ── Geometry ───────────────────────────────────────────────────────────────


class TestGeometry:
    def test_distance_same_point(self):
        assert distance_2d((10, 20), (10, 20)) == 0

    def test_distance_pythagorean(self):
        assert distance_2d((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_clamp(self):
        assert clamp(5, 0, 10) == 5
        assert clamp(-1, 0, 10) == 0
        assert clamp(11, 0, 10) == 10

    def test_lerp_endpoints(self):
        assert lerp_point((0, 0), (10, -20), 0.0) == (0, 0)
        assert lerp_point((0, 0), (10, -20), 1.0) == (10, -20)
        assert lerp_point((0, 0), (10, -20), 0.5) == (5, -10)

    def test_aim_inside_bounds_untouched(self):
        assert clamp_aim_point(0, 0) == (0, 0)

    def test_aim_clamped_to_margins(self):
        assert clamp_aim_point(-5000, -5000) == (WORLD_LEFT + 20, WORLD_BOTTOM + 20)
        assert clamp_aim_point(5000, 5000) == (WORLD_RIGHT - 20, WORLD_TOP - 10)


# ── Wave formulas ──────────────────────────────────────────────────────────


class TestWaveFormulas:
    def test_wave_1(self):
        assert get_enemy_count(1) == 10
        assert get_spawn_rate(1) == pytest.approx(0.96)

    def test_wave_5(self):
        assert get_enemy_count(5) == 26
        assert get_spawn_rate(5) == pytest.approx(0.70)

    def test_spawn_rate_floor(self):
        assert get_spawn_rate(50) == pytest.approx(0.23)

    def test_split_probability_wave_6(self):
        assert get_split_probability(6) == pytest.approx(0.25)

    def test_split_probability_cap(self):
        assert get_split_probability(20) == pytest.approx(0.35)

    def test_bonus_formula(self):
        # Bases holding 4 and 7 (third base dead), 5 cities standing
        assert calculate_wave_bonus(surviving_cities=5, remaining_ammo=4 + 7) == 555

    def test_bonus_zero(self):
        assert calculate_wave_bonus(0, 0) == 0


# ── Structures ─────────────────────────────────────────────────────────────


class TestCity:
    def test_six_cities(self):
        cities = build_cities()
        assert len(cities) == 6
        assert all(c.alive for c in cities)
        assert all(c.position_y == STRUCTURE_Y for c in cities)

    def test_destroy_is_terminal(self):
        city = City(index=0, position_x=0)
        assert city.destroy() is True
        assert city.destroy() is False
        assert city.alive is False


class TestLaunchBase:
    def test_three_bases_full(self):
        bases = build_bases()
        assert [b.position_x for b in bases] == [-420, 0, 420]
        assert all(b.ammo == MAX_BASE_AMMO for b in bases)

    def test_take_round_decrements_by_one(self):
        base = LaunchBase(index=0, position_x=0)
        assert base.take_round() is True
        assert base.ammo == MAX_BASE_AMMO - 1

    def test_take_round_refused_when_empty(self):
        base = LaunchBase(index=0, position_x=0, ammo=0)
        assert base.take_round() is False
        assert base.ammo == 0

    def test_ammo_never_negative(self):
        base = LaunchBase(index=0, position_x=0)
        for _ in range(MAX_BASE_AMMO + 5):
            base.take_round()
        assert base.ammo == 0

    def test_destroy_empties(self):
        base = LaunchBase(index=0, position_x=0, ammo=6)
        assert base.destroy() is True
        assert base.ammo == 0
        assert not base.can_fire()

    def test_dead_base_not_rearmed(self):
        base = LaunchBase(index=0, position_x=0)
        base.destroy()
        base.rearm()
        assert base.ammo == 0

    def test_rearm_caps_at_max(self):
        base = LaunchBase(index=0, position_x=0, ammo=3)
        base.rearm()
        assert base.ammo == MAX_BASE_AMMO


class TestPickLaunchBase:
    def test_nearest_horizontal(self):
        bases = build_bases()
        assert pick_launch_base(bases, 380).index == 2
        assert pick_launch_base(bases, -300).index == 0

    def test_tie_goes_to_first(self):
        bases = build_bases()
        assert pick_launch_base(bases, -210).index == 0

    def test_skips_empty_and_dead(self):
        bases = build_bases()
        bases[1].ammo = 0
        bases[2].destroy()
        assert pick_launch_base(bases, 50).index == 0

    def test_none_when_nothing_can_fire(self):
        bases = build_bases()
        for b in bases:
            b.ammo = 0
        assert pick_launch_base(bases, 0) is None


# ── Missiles ───────────────────────────────────────────────────────────────


def _enemy(**kwargs):
    defaults = dict(
        start=(0.0, 400.0),
        end=(0.0, 0.0),
        speed=100.0,
        target=Target.ground(0.0, 0.0),
    )
    defaults.update(kwargs)
    return EnemyMissile(**defaults)


class TestMissileMotion:
    def test_initial_state(self):
        m = _enemy()
        assert m.position == (0.0, 400.0)
        assert m.distance == pytest.approx(400.0)
        assert m.progress == 0

    def test_progress_formula(self):
        m = _enemy()
        m.update(0.5)
        assert m.progress == pytest.approx(100 * 0.5 / 400)
        assert m.position[1] == pytest.approx(350.0)

    def test_progress_monotonic(self):
        m = _enemy()
        last = m.progress
        while not m.update(0.033):
            assert m.progress >= last
            last = m.progress

    def test_arrival_pins_position_to_end(self):
        m = _enemy(speed=100_000.0)
        assert m.update(0.033) is True
        assert m.progress >= 1
        assert m.position == (0.0, 0.0)

    def test_ready_to_split(self):
        m = _enemy(can_split=True, split_at=0.5)
        m.update(1.0)
        assert not m.ready_to_split
        m.update(1.0)
        assert m.ready_to_split
        m.did_split = True
        assert not m.ready_to_split

    def test_player_missile(self):
        m = PlayerMissile(start=(0.0, 0.0), end=(300.0, 400.0), speed=500.0)
        assert m.distance == pytest.approx(500.0)
        assert m.update(0.5) is False
        assert m.position == (pytest.approx(150.0), pytest.approx(200.0))
        assert m.update(0.5) is True


class TestTarget:
    def test_target_of_city(self):
        city = City(index=2, position_x=-170)
        target = Target.of(city)
        assert target.kind is TargetKind.CITY
        assert target.ref is city
        assert target.position == city.position

    def test_target_of_base(self):
        base = LaunchBase(index=1, position_x=0)
        assert Target.of(base).kind is TargetKind.BASE

    def test_ground_target_has_no_ref(self):
        target = Target.ground(5, 6)
        assert target.kind is TargetKind.GROUND
        assert target.ref is None


# ── Explosions ─────────────────────────────────────────────────────────────


class TestExplosion:
    def _explosion(self, kind=ExplosionKind.DEFENSE, max_radius=20.0):
        return Explosion(kind=kind, position=(0, 0), max_radius=max_radius,
                         growth=DEFENSE_GROWTH)

    def test_ground_damage_only_for_warheads(self):
        assert self._explosion(ExplosionKind.WARHEAD).can_damage_ground
        assert not self._explosion(ExplosionKind.DEFENSE).can_damage_ground

    def test_grows_then_shrinks(self):
        exp = self._explosion()
        radii = [exp.radius]
        flips = 0
        was_shrinking = False
        while exp.update(0.01):
            if exp.shrinking and not was_shrinking:
                flips += 1
                was_shrinking = True
            radii.append(exp.radius)
        peak = radii.index(max(radii))
        assert all(a < b for a, b in zip(radii[:peak], radii[1:peak + 1]))
        assert all(a > b for a, b in zip(radii[peak:], radii[peak + 1:]))
        assert flips == 1
        assert max(radii) == 20.0

    def test_shrink_rate(self):
        exp = self._explosion()
        exp.radius = 20.0
        exp.shrinking = True
        exp.update(0.01)
        assert exp.radius == pytest.approx(20.0 - DEFENSE_GROWTH * 0.01 * EXPLOSION_SHRINK_FACTOR)

    def test_finished_at_zero(self):
        exp = self._explosion()
        exp.radius = 0.1
        exp.shrinking = True
        assert exp.update(0.01) is False
        assert exp.finished

    def test_contains(self):
        exp = self._explosion()
        exp.radius = 10
        assert exp.contains((6, 8))
        assert not exp.contains((8, 8))

    def test_create_sizes(self, scripted):
        exp = Explosion.create(ExplosionKind.DEFENSE, (0, 0), scripted([0.0]))
        assert exp.max_radius == 50
        assert exp.growth == 220
        exp = Explosion.create(ExplosionKind.WARHEAD, (0, 0), scripted([1.0]))
        assert exp.max_radius == 58
        assert exp.growth == 170


# ── Registry ───────────────────────────────────────────────────────────────


class TestEntityRegistry:
    def test_seeded_structures_notify_render(self, registry, render):
        assert len(registry.cities) == 6
        assert len(registry.bases) == 3
        kinds = [k for _, k in render.created]
        assert kinds.count(VisualKind.CITY) == 6
        assert kinds.count(VisualKind.BASE) == 3

    def test_add_stores_handle(self, registry):
        m = registry.add(_enemy())
        assert registry.enemy_missiles == [m]
        assert m.visual is not None

    def test_split_capable_missile_gets_own_visual(self, registry, render):
        registry.add(_enemy(can_split=True, split_at=0.4))
        assert render.created[-1][1] is VisualKind.SPLIT_MISSILE

    def test_remove_at_notifies(self, registry, render):
        a = registry.add(_enemy())
        b = registry.add(_enemy())
        removed = registry.remove_at(registry.enemy_missiles, 0)
        assert removed is a
        assert registry.enemy_missiles == [b]
        assert render.removed[-1] is a
        assert a.visual is None

    def test_remove_by_identity(self, registry):
        m = registry.add(PlayerMissile(start=(0, 0), end=(0, 100), speed=1))
        assert registry.remove(m) is True
        assert registry.remove(m) is False

    def test_alive_queries(self, registry):
        registry.cities[0].destroy()
        registry.bases[1].ammo = 0
        registry.bases[2].destroy()
        assert len(registry.alive_cities()) == 5
        assert len(registry.alive_bases()) == 2
        assert registry.alive_bases_with_ammo() == [registry.bases[0]]

    def test_total_ammo_ignores_dead(self, registry):
        registry.bases[0].ammo = 4
        registry.bases[1].destroy()
        registry.bases[2].ammo = 7
        assert registry.total_ammo == 11

    def test_dynamic_count_and_clear(self, registry):
        registry.add(_enemy())
        registry.add(PlayerMissile(start=(0, 0), end=(0, 100), speed=1))
        registry.add(Explosion(kind=ExplosionKind.WARHEAD, position=(0, 0),
                               max_radius=10, growth=10))
        assert registry.dynamic_count == 3
        registry.clear_dynamic()
        assert registry.dynamic_count == 0

    def test_reset_revives_structures(self, registry):
        for city in registry.cities:
            city.destroy()
        registry.bases[0].destroy()
        registry.reset()
        assert all(c.alive for c in registry.cities)
        assert all(b.alive and b.ammo == MAX_BASE_AMMO for b in registry.bases)

    def test_render_failures_are_swallowed(self, fakes):
        reg = EntityRegistry(render=fakes.ExplodingRender())
        reg.seed_structures()
        m = reg.add(_enemy())
        reg.touch(m)
        reg.remove(m)
        assert reg.dynamic_count == 0
        assert len(reg.cities) == 6

    def test_rejects_foreign_objects(self, registry):
        with pytest.raises(TypeError):
            registry.add(object())
