[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadsim"
version = "0.1.0"
description = "Headless game simulations: tile-based platformer physics, particle emitters, Life, Snake, Arkanoid, Asteroids and camera maths"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "physics", "platformer", "particles", "game-of-life"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quadsim"]

[tool.pytest.ini_options]
addopts = "-ra"
