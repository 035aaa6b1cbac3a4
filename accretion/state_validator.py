"""
This module provides validation utilities for game states.

The StateValidator class offers static methods to check that a SimulationState is sane:
array shapes agree, every live particle has a positive finite mass and finite position
and velocity, the live count respects the particle ceiling, the central mass lies in
[0, max_mass], and upgrade levels sit between 1 and their caps. problems() lists every
violation; state_is_valid() is the boolean form; report_invalid_state() logs the list.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, List
import numpy as np

if TYPE_CHECKING:
	from .simulation_state import SimulationState

logger = logging.getLogger(__name__)




class StateValidator:
	@staticmethod
	def problems(state: "SimulationState") -> List[str]:
		out: List[str] = []
		n = state._mass.shape[0]

		if state._pos.shape != (n, 2) or state._vel.shape != (n, 2):
			out.append(f"position/velocity shapes {state._pos.shape}/{state._vel.shape} do not match {n} masses")
			return out
		if state._alive.shape != (n,) or state._uid.shape != (n,) or state._color.shape != (n,):
			out.append("alive/uid/color arrays do not match particle count")
			return out

		live = state._alive
		m = state._mass[live]
		if np.any(~(m > 0.0)) or not np.all(np.isfinite(m)):
			out.append("live particle masses must be positive and finite")
		if not np.all(np.isfinite(state._pos[live])) or not np.all(np.isfinite(state._vel[live])):
			out.append("live particle positions and velocities must be finite")
		if np.unique(state._uid).size != n:
			out.append("particle ids must be unique")

		if state.n_alive > int(state.cfg.max_particles):
			out.append(f"{state.n_alive} live particles exceed ceiling {state.cfg.max_particles}")

		mass = state.body.mass
		if not math.isfinite(mass) or mass < 0.0 or mass > state.body.max_mass:
			out.append(f"central mass {mass} outside [0, {state.body.max_mass}]")

		for tid, track in state.economy.tracks.items():
			if not 1 <= track.level <= track.spec.cap:
				out.append(f"track {tid.value} level {track.level} outside [1, {track.spec.cap}]")

		return out

	@staticmethod
	def state_is_valid(state: "SimulationState") -> bool:
		return not StateValidator.problems(state)

	@staticmethod
	def report_invalid_state(label: str, state: "SimulationState") -> List[str]:
		found = StateValidator.problems(state)
		if found:
			logger.warning("[invalid] %s", label)
			for line in found:
				logger.warning("  %s", line)
		return found
