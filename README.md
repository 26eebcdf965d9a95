# quadsim

quadsim is a set of small game simulations. None of them draws anything. Each
one holds the game state and moves it forward one step at a time. You can
drive it from any front end, from a script or from tests.

## Modules

- `quadsim.geometry` contains the immutable `Vec2` and `Vec3` vectors, `Rect`
  and `polar_to_cartesian`.
- `quadsim.platformer` is pixel-exact platformer physics. A `World` holds
  static tile layers made of `Tile` values, `Actor`s and moving `Solid`s. It
  has `move_h`, `move_v`, `solid_move`, `collide_check`, `collide_solids`,
  `collide_tag`, `tag_at`, `solid_at` and `squished`.
- `quadsim.particle_config` describes particle emitters:
  - `EmitterConfig`, `Curve` and `BatchedCurve`
  - `Color` and `ColorCurve`
  - `AtlasConfig`
  - the emission shapes `PointEmission`, `RectEmission` and `SphereEmission`
  - the particle shapes `RectangleShape`, `CircleShape` and `CustomMeshShape`,
    each with a `mesh()` method
  - `ParticleMaterial` and `BlendMode`
- `quadsim.emitter` simulates particles with `Emitter` and `EmittersCache`.
  `Emitter.draw(pos, dt)` moves the emitter, advances it and returns the live
  `Particle`s. `EmittersCache.draw(dt)` returns the position and particles of
  each active effect and puts finished emitters back in the pool.
- `quadsim.life` is Conway's Game of Life on a bounded grid. It provides
  `Life`, `CellState` and `next_state`. Cells outside the grid count as dead.
- `quadsim.snake` is Snake on a square board, 16×16 by default. It provides
  `SnakeGame` with `steer`, `tick` and `restart`. The caller calls `tick` once
  every `speed` seconds.
- `quadsim.arkanoid` is a brick-breaker in a 20×20 world. `Arkanoid.update`
  takes the frame time and the held keys. `remaining_blocks` counts the bricks
  still standing.
- `quadsim.asteroids` is Asteroids. It provides `AsteroidsGame`, `Ship`,
  `Bullet`, `Asteroid` and `wrap_around`. A new `AsteroidsGame` has no
  asteroids, so call `reset()` to start a round. `ship_triangle()` gives the
  outline of the ship.
- `quadsim.camera_math` contains the angle helpers `short_angle_dist`,
  `angle_lerp` and `wrap_rotation`, and a `FirstPersonCamera` with `look`,
  `move` and a `target` point.

Functions that use randomness take a `random.Random`, either as an argument or
through the constructor, so a seeded generator gives repeatable runs.

## Example: platformer

```python
from quadsim.geometry import Vec2
from quadsim.platformer import Tile, World

world = World()
# One row of floor under three empty rows, on 8×8 tiles, 4 tiles wide.
tiles = [Tile.EMPTY] * 12 + [Tile.SOLID] * 4
world.add_static_tiled_layer(tiles, 8.0, 8.0, 4, 1)

player = world.add_actor(Vec2(8.0, 0.0), 8, 8)
while world.move_v(player, 1.0):
    pass
print(world.actor_pos(player))  # Vec2(x=8.0, y=16.0)
```

`move_v` returns `False` once the actor lands on the floor.

## Example: particles

```python
from quadsim.emitter import Emitter
from quadsim.geometry import Vec2
from quadsim.particle_config import EmitterConfig

emitter = Emitter(EmitterConfig(amount=10, lifetime=0.5))
for _ in range(60):
    particles = emitter.draw(Vec2(100.0, 100.0), 1 / 60)
```

## What it does not do

quadsim has no window, renderer, input handling, sound or user interface. It
also has no command to run. Particle materials, textures and blend modes are
stored and reported as plain data, and nothing here shades or draws them. The
games take their key states and times as arguments rather than reading them
from a device.

## Running the tests

```
pip install -e .[test]
pytest
```