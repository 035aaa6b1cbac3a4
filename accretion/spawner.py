"""
This module creates new particles around the central body.

The Spawner class decides how many particles a request may create under the global
particle ceiling, then draws each one's initial conditions from the state's random
generator: a uniform angle, a radius uniform in the spawn annulus between the central
body's edge plus a margin and a fraction of half the smaller viewport side, and a
tangential velocity set to a fixed fraction of the circular-orbit speed for that radius
at the current gravity level. Because the fraction is below one the orbits are
sub-orbital and decay inward. Masses come from the particle-mass upgrade at the moment
of spawning. With the "cap" policy a request larger than the remaining room is trimmed;
with "reject" it is refused outright. Every outcome is returned as a SpawnOutcome; the
spawner never raises for policy reasons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .constants import ORBIT_SENSE
from .physics import acceleration_magnitude, circular_speed

if TYPE_CHECKING:
	from .simulation_state import SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnOutcome:
	requested: int
	spawned: int
	reason: str = ""

	@property
	def accepted(self) -> bool:
		return self.spawned > 0


class Spawner:

	def __init__(self, state: "SimulationState"):
		self.state = state

	def plan_count(self, requested: int) -> Tuple[int, str]:
		requested = max(int(requested), 0)
		room = self.state.capacity_left
		if requested == 0:
			return 0, "empty_request"
		if room == 0:
			return 0, "ceiling"
		if requested <= room:
			return requested, ""
		if self.state.cfg.spawn_policy == "reject":
			return 0, "ceiling"
		return room, "capped"

	def _generate_positions(self, n: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		rng = self.state.rng
		inner, outer = self.state.spawn_band()
		theta = rng.uniform(0.0, 2.0 * np.pi, n)
		r = rng.uniform(inner, outer, n)
		cx, cy = self.state.body.center
		pos = np.column_stack((cx + r * np.cos(theta), cy + r * np.sin(theta)))
		return pos, theta, r

	def _generate_velocities(self, mass: np.ndarray, theta: np.ndarray, r: np.ndarray) -> np.ndarray:
		cfg = self.state.cfg
		level = self.state.economy.gravity_level()
		accel = acceleration_magnitude(mass, cfg.gravity_constant, level, cfg.mass_gravity_gain)
		speed = cfg.orbit_speed_fraction * circular_speed(accel, r)
		tangent = ORBIT_SENSE * np.column_stack((-np.sin(theta), np.cos(theta)))
		return tangent * speed[:, None]

	def generate(self, n: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
		mass = np.full(n, self.state.economy.particle_mass(), dtype=np.float64)
		pos, theta, r = self._generate_positions(n)
		vel = self._generate_velocities(mass, theta, r)
		colors = self.state.rng.integers(0, 2**31 - 1, n, dtype=np.int64)
		return mass, pos, vel, colors

	def spawn(self, requested: int | None = None) -> SpawnOutcome:
		if requested is None:
			requested = self.state.economy.particles_per_spawn()
		count, reason = self.plan_count(requested)
		if count == 0:
			logger.debug("spawn of %d refused (%s), %d alive", requested, reason, self.state.n_alive)
			return SpawnOutcome(int(requested), 0, reason)

		mass, pos, vel, colors = self.generate(count)
		self.state.append(mass, pos, vel, colors)
		if reason:
			logger.debug("spawn capped from %d to %d", requested, count)
		return SpawnOutcome(int(requested), count, reason)
