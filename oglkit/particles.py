"""A CPU particle fountain.

Particles are spawned at the origin with a random upward velocity, move
under gravity with explicit Euler steps, and respawn when their life runs
out. Their state can be packed into the 48-byte layout a shader storage
buffer expects.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

Vec3 = tuple[float, float, float]

GRAVITY: Vec3 = (0.0, -9.8, 0.0)
DEFAULT_PARTICLE_COUNT = 3000
PARTICLE_COUNT_CHOICES = (
    1024,
    2048,
    4096,
    8192,
    16384,
    32768,
    65536,
    131072,
    262144,
    524288,
)
# position, life, velocity, size, colour, padding
FLOATS_PER_PARTICLE = 12
PARTICLE_STRIDE = FLOATS_PER_PARTICLE * 4


def _uniform(rng: random.Random, low: float, high: float) -> float:
    return (high - low) * rng.random() + low


@dataclass
class Particle:
    """State of one particle."""

    position: Vec3 = (0.0, 0.0, 0.0)
    life: float = 0.0
    velocity: Vec3 = (0.0, 0.0, 0.0)
    size: float = 0.1
    color: Vec3 = (0.0, 0.0, 0.0)
    padding: float = 0.0

    def as_row(self) -> tuple[float, ...]:
        """Fields in buffer order."""
        return (
            *self.position,
            self.life,
            *self.velocity,
            self.size,
            *self.color,
            self.padding,
        )


@dataclass
class GeneratorSettings:
    """Ranges used when spawning new particles."""

    size: float = 0.4
    velocity_min: float = 5.0
    velocity_max: float = 10.0
    life_min: float = 0.1
    life_max: float = 1.0

    def sanitize(self) -> None:
        """Force the ranges into a usable, non-empty state."""
        self.size = max(self.size, 0.0001)
        self.velocity_min = max(self.velocity_min, 0.0)
        self.velocity_max = max(self.velocity_max, self.velocity_min)
        self.life_min = max(self.life_min, 0.0)
        self.life_max = max(self.life_max, self.life_min)

    def create_particle(self, rng: random.Random | None = None) -> Particle:
        """Spawn a particle at the origin with random velocity, life and colour."""
        rng = rng if rng is not None else random.Random()
        vx = _uniform(rng, -self.size, self.size)
        vz = _uniform(rng, -self.size, self.size)
        vy = _uniform(rng, self.velocity_min, self.velocity_max)
        life = _uniform(rng, self.life_min, self.life_max)
        r = _uniform(rng, 0.5, 1.0)
        g = _uniform(rng, 0.0, 0.5)
        b = _uniform(rng, 0.0, 0.5)
        size = _uniform(rng, 0.1, 0.25)
        return Particle(
            position=(0.0, 0.0, 0.0),
            life=life,
            velocity=(vx, vy, vz),
            size=size,
            color=(r, g, b),
        )


class ParticleSystem:
    """A fixed-size set of particles driven by one generator."""

    def __init__(
        self,
        count: int = DEFAULT_PARTICLE_COUNT,
        settings: GeneratorSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings if settings is not None else GeneratorSettings()
        self.rng = rng if rng is not None else random.Random()
        self.particles: list[Particle] = []
        self.resize(count)

    @property
    def count(self) -> int:
        return len(self.particles)

    def resize(self, count: int) -> None:
        """Replace every particle with ``count`` freshly spawned ones."""
        if count < 0:
            raise ValueError("particle count cannot be negative")
        self.particles = [
            self.settings.create_particle(self.rng) for _ in range(count)
        ]

    def step(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds, respawning dead particles."""
        gx, gy, gz = GRAVITY
        for index, particle in enumerate(self.particles):
            particle.life -= dt
            if particle.life <= 0.0:
                self.particles[index] = self.settings.create_particle(self.rng)
                continue
            px, py, pz = particle.position
            vx, vy, vz = particle.velocity
            particle.position = (px + dt * vx, py + dt * vy, pz + dt * vz)
            particle.velocity = (vx + dt * gx, vy + dt * gy, vz + dt * gz)

    def sort_by_distance(self, eye: Sequence[float]) -> None:
        """Order particles from the farthest to the nearest to ``eye``."""
        ex, ey, ez = (float(c) for c in eye)

        def squared_distance(particle: Particle) -> float:
            px, py, pz = particle.position
            return (ex - px) ** 2 + (ey - py) ** 2 + (ez - pz) ** 2

        self.particles.sort(key=squared_distance, reverse=True)

    def pack(self) -> np.ndarray:
        """Particle data as a ``(count, 12)`` float32 array in buffer order."""
        data = np.array(
            [particle.as_row() for particle in self.particles], dtype=np.float32
        )
        return data.reshape(-1, FLOATS_PER_PARTICLE)