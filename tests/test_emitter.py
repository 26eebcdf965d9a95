import random

import pytest

from quadsim.emitter import Emitter, EmittersCache
from quadsim.geometry import Vec2
from quadsim.particle_config import (
    AtlasConfig,
    BlendMode,
    CircleShape,
    Color,
    ColorCurve,
    Curve,
    EmitterConfig,
)


def make(**kwargs):
    return Emitter(EmitterConfig(**kwargs), random.Random(1))


def test_full_explosiveness_spawns_whole_amount_at_once():
    emitter = make(explosiveness=1.0, amount=5)
    particles = emitter.draw(Vec2(0.0, 0.0), 0.01)
    assert len(particles) == 5


def test_spawn_never_exceeds_amount():
    emitter = make(amount=4, lifetime=10.0)
    for _ in range(50):
        emitter.update(0.5)
        assert len(emitter.particles) <= 4


def test_zero_amount_spawns_nothing():
    emitter = make(amount=0)
    emitter.update(1.0)
    assert emitter.particles == ()


def test_world_particles_start_at_emitter_position_and_move():
    emitter = make(explosiveness=1.0, amount=1, initial_velocity=50.0)
    (particle,) = emitter.draw(Vec2(10.0, 20.0), 0.1)
    assert particle.x == pytest.approx(10.0)
    assert particle.y == pytest.approx(20.0 - 50.0 * 0.1)


def test_local_particles_ignore_emitter_position():
    emitter = make(explosiveness=1.0, amount=1, local_coords=True, initial_velocity=0.0)
    (particle,) = emitter.draw(Vec2(100.0, 100.0), 0.1)
    assert (particle.x, particle.y) == (0.0, 0.0)


def test_gravity_changes_velocity():
    emitter = make(explosiveness=1.0, amount=1, initial_velocity=0.0, gravity=Vec2(0.0, 10.0))
    (particle,) = emitter.draw(Vec2(0.0, 0.0), 0.5)
    assert particle.velocity.y == pytest.approx(10.0 * 0.5)


def test_first_update_uses_start_colour():
    red = Color(1.0, 0.0, 0.0, 1.0)
    curve = ColorCurve(start=red, mid=Color(0.0, 1.0, 0.0), end=Color(0.0, 0.0, 1.0))
    emitter = make(explosiveness=1.0, amount=1, colors_curve=curve)
    (particle,) = emitter.draw(Vec2(0.0, 0.0), 0.1)
    assert particle.color == pytest.approx(red.to_tuple())


def test_constant_size_curve_scales_size():
    curve = Curve(points=[(0.0, 0.5), (1.0, 0.5)])
    emitter = make(explosiveness=1.0, amount=2, size=10.0, size_curve=curve)
    for particle in emitter.draw(Vec2(0.0, 0.0), 0.1):
        assert particle.size == pytest.approx(10.0 * 0.5)


def test_rebuild_size_curve_picks_up_new_curve():
    emitter = make(explosiveness=1.0, amount=1, size=4.0)
    emitter.config.size_curve = Curve(points=[(0.0, 0.25), (1.0, 0.25)])
    emitter.rebuild_size_curve()
    (particle,) = emitter.draw(Vec2(0.0, 0.0), 0.1)
    assert particle.size == pytest.approx(4.0 * 0.25)


def test_atlas_uv_cell_size():
    emitter = make(explosiveness=1.0, amount=1, atlas=AtlasConfig.from_range(4, 2, 0, None, False))
    (particle,) = emitter.draw(Vec2(0.0, 0.0), 0.1)
    assert particle.uv[2] == pytest.approx(1.0 / 4)
    assert particle.uv[3] == pytest.approx(1.0 / 2)


def test_without_atlas_uv_covers_whole_texture():
    emitter = make(explosiveness=1.0, amount=1)
    (particle,) = emitter.draw(Vec2(0.0, 0.0), 0.1)
    assert particle.uv == (0.0, 0.0, 1.0, 1.0)


def test_one_shot_stops_and_particles_expire():
    emitter = make(explosiveness=1.0, amount=3, one_shot=True, lifetime=0.5)
    emitter.draw(Vec2(0.0, 0.0), 0.3)
    for _ in range(5):
        emitter.draw(Vec2(0.0, 0.0), 0.3)
    assert emitter.config.emitting is False
    assert emitter.particles == ()


def test_emit_ignores_emitting_flag_and_counts_twice():
    emitter = make(emitting=False)
    emitter.emit(Vec2(1.0, 2.0), 3)
    assert len(emitter.particles) == 3
    assert emitter.particles_spawned == 2 * 3
    emitter.update(0.1)
    assert len(emitter.particles) == 3


def test_reset_clears_everything():
    emitter = make(explosiveness=1.0, amount=4)
    emitter.update(0.1)
    emitter.reset()
    assert emitter.particles == ()
    assert emitter.particles_spawned == 0


def test_mesh_rebuilds_after_update_particle_mesh():
    emitter = make()
    emitter.config.shape = CircleShape(6)
    emitter.update(0.0)
    assert emitter.mesh != CircleShape(6).mesh()
    emitter.update_particle_mesh()
    emitter.update(0.0)
    assert emitter.mesh == CircleShape(6).mesh()


def test_blend_state_follows_config_after_draw():
    emitter = make()
    emitter.config.blend_mode = BlendMode.ADDITIVE
    emitter.draw(Vec2(0.0, 0.0), 0.0)
    assert emitter.blend_state == BlendMode.ADDITIVE.blend_state()


def test_same_seed_gives_same_particles():
    config = dict(explosiveness=1.0, amount=5, initial_direction_spread=2.0, size_randomness=0.5)
    a = Emitter(EmitterConfig(**config), random.Random(7))
    b = Emitter(EmitterConfig(**config), random.Random(7))
    assert a.draw(Vec2(0.0, 0.0), 0.1) == b.draw(Vec2(0.0, 0.0), 0.1)


def test_cache_reuses_finished_emitters():
    config = EmitterConfig(one_shot=True, explosiveness=1.0, amount=2, lifetime=0.3)
    cache = EmittersCache(config, random.Random(3))
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE
    cache.spawn(Vec2(5.0, 5.0))
    assert cache.active_count == 1
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE - 1
    drawn = cache.draw(0.1)
    assert drawn[0][0] == Vec2(5.0, 5.0)
    for _ in range(10):
        cache.draw(0.2)
    assert cache.active_count == 0
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE


def test_cache_creates_new_emitters_when_empty():
    config = EmitterConfig(amount=1)
    cache = EmittersCache(config, random.Random(0))
    for _ in range(EmittersCache.CACHE_DEFAULT_SIZE + 2):
        cache.spawn(Vec2(0.0, 0.0))
    assert cache.active_count == EmittersCache.CACHE_DEFAULT_SIZE + 2
    assert cache.cached_count == 0