from __future__ import annotations
import math
import numpy as np
from typing import Dict, Tuple
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .simulation_state import SimulationState

"""
This module computes bookkeeping quantities for a running game. The Diagnostics class reports the mass held by live particles, the total mass (central body plus particles, which only absorption clamping and purchases can change), linear momentum, kinetic energy, the particles' center of mass, the mean distance to the center, and a summary dictionary used by the headless runner and by tests to check conservation across ticks. All quantities consider live rows only, so they are meaningful in the middle of a tick as well as after compaction.

"""




class Diagnostics:

	def __init__(self, state: "SimulationState"):
		self.state = state

	def _live(self) -> np.ndarray:
		return np.flatnonzero(self.state._alive)

	def particle_mass(self) -> float:
		return float(np.sum(self.state._mass[self._live()]))

	def total_mass(self) -> float:
		return float(self.state.body.mass) + self.particle_mass()

	def momentum(self) -> np.ndarray:
		idx = self._live()
		if idx.size == 0:
			return np.zeros(2)
		return np.sum(self.state._mass[idx, None] * self.state._vel[idx], axis=0)

	def kinetic_energy(self) -> float:
		idx = self._live()
		v = self.state._vel[idx]
		return 0.5 * float(np.sum(self.state._mass[idx] * np.sum(v * v, axis=1)))

	def center_of_mass(self) -> Tuple[np.ndarray, np.ndarray]:
		idx = self._live()
		m = self.state._mass[idx]
		M = float(np.sum(m))
		if M == 0.0:
			return np.zeros(2), np.zeros(2)
		com_pos = np.sum(m[:, None] * self.state._pos[idx], axis=0) / M
		com_vel = np.sum(m[:, None] * self.state._vel[idx], axis=0) / M
		return com_pos, com_vel

	def mean_center_distance(self) -> float:
		idx = self._live()
		if idx.size == 0:
			return 0.0
		c = np.asarray(self.state.body.center, dtype=float)
		d = np.linalg.norm(self.state._pos[idx] - c[None, :], axis=1)
		return float(np.mean(d))

	def summary(self) -> Dict[str, float]:
		p = self.momentum()
		return {
			"tick": float(self.state.tick_count),
			"time": float(self.state.time),
			"particles": float(self.state.n_alive),
			"central_mass": float(self.state.body.mass),
			"central_radius": float(self.state.body.radius),
			"gravity_level": float(self.state.economy.gravity_level()),
			"particle_mass": self.particle_mass(),
			"total_mass": self.total_mass(),
			"momentum": float(math.hypot(p[0], p[1])),
			"kinetic_energy": self.kinetic_energy(),
			"mean_center_distance": self.mean_center_distance(),
		}
