"""Headless game simulations: platformer physics, particle emitters, Life, Snake, Arkanoid, Asteroids and camera maths."""

__version__ = "0.1.0"