"""
This module advances a SimulationState by one frame tick.

tick() converts the elapsed wall time into frame units (velocities are measured in
pixels per reference frame) and splits it into equal substeps when it exceeds the
configured step scale, the same way a fixed-step integrator subdivides a long step.
Elapsed time beyond max_substeps * max_step_scale frames is dropped so that a stalled
display cannot fling particles across the field. The gravity level is read once per tick
from the accumulated mass and held for every substep.

Each substep first runs absorb(): any live particle closer to the center than the sum
of both radii (or closer than the epsilon distance) is marked dead and its mass is
credited to the central body exactly once, clamped at the mass cap. The survivors then
go through integrate(): a constant-magnitude pull toward the current center scaled by
the gravity level and the particle's mass amplification, then drag, then the position
update using the new velocity (semi-implicit Euler).

After the last substep merge_collisions() walks pairs (i, j), i < j, in ascending row
order, which is creation order. Whenever two live particles touch, j is merged into i
and marked dead, and i keeps scanning with its new mass, position and radius, so chained
merges inside one tick are reproducible. Dead rows are skipped by every later check and
only physically removed by compact() once the tick is complete.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

import numpy as np

from .geometry import center_offsets, pair_overlaps
from .physics import acceleration_magnitude, damping, merge_velocity, particle_radius

if TYPE_CHECKING:
	from .sim_config import GameConfig
	from .simulation_state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
	dt: float = 0.0
	substeps: int = 0
	absorbed_uids: List[int] = field(default_factory=list)
	absorbed_mass: float = 0.0
	credited_mass: float = 0.0
	merges: List[Tuple[int, int]] = field(default_factory=list)
	clamped_merges: int = 0
	removed: int = 0

	@property
	def absorbed(self) -> int:
		return len(self.absorbed_uids)


def substep_schedule(cfg: "GameConfig", dt: float) -> Tuple[int, float]:
	scale = float(dt) / float(cfg.frame_dt)
	limit = float(cfg.max_step_scale) * int(cfg.max_substeps)
	if scale > limit:
		scale = limit
	n_sub = int(max(1, min(int(cfg.max_substeps), math.ceil(scale / float(cfg.max_step_scale)))))
	return n_sub, scale / n_sub


def absorb(state: "SimulationState", report: TickReport | None = None) -> Tuple[int, float]:
	alive = state._alive
	if not np.any(alive):
		return 0, 0.0

	cfg = state.cfg
	_, d = center_offsets(state._pos, state.body.center)
	threshold = state.body.radius + state.radii()
	hit = alive & ((d < threshold) | (d < float(cfg.min_distance_epsilon)))
	if not np.any(hit):
		return 0, 0.0

	idx = np.flatnonzero(hit)
	mass = float(np.sum(state._mass[idx]))
	state._alive[idx] = False
	credited = state.body.absorb(mass)

	if report is not None:
		report.absorbed_uids.extend(int(u) for u in state._uid[idx])
		report.absorbed_mass += mass
		report.credited_mass += credited
	return int(idx.size), mass


def integrate(state: "SimulationState", h: float, level: float) -> None:
	idx = np.flatnonzero(state._alive)
	if idx.size == 0:
		return

	cfg = state.cfg
	m = state._mass[idx]
	dr, d = center_offsets(state._pos[idx], state.body.center)
	d = np.maximum(d, float(cfg.min_distance_epsilon))
	unit = dr / d[:, None]

	a = acceleration_magnitude(m, cfg.gravity_constant, level, cfg.mass_gravity_gain)
	vel = state._vel[idx] + unit * (a * h)[:, None]
	vel *= (damping(m, cfg.base_drag, cfg.drag_per_mass, cfg.drag_floor) ** h)[:, None]

	state._vel[idx] = vel
	state._pos[idx] = state._pos[idx] + vel * h


def _first_contact(state: "SimulationState", i: int, start: int) -> int:
	if start >= state.n_rows:
		return -1
	cfg = state.cfg
	r_i = float(particle_radius(state._mass[i], cfg.particle_base_radius, cfg.particle_radius_gain))
	diff = state._pos[start:] - state._pos[i]
	d2 = np.einsum("ij,ij->i", diff, diff)
	reach = r_i + particle_radius(state._mass[start:], cfg.particle_base_radius, cfg.particle_radius_gain)
	hit = state._alive[start:] & (d2 < reach * reach)
	if not np.any(hit):
		return -1
	return start + int(np.argmax(hit))


def _merge_into(state: "SimulationState", i: int, j: int) -> bool:
	cfg = state.cfg
	mi = float(state._mass[i])
	mj = float(state._mass[j])
	total = mi + mj

	vel, clamped = merge_velocity(
		mi, state._vel[i], mj, state._vel[j],
		keep_speed=cfg.merge_keep_speed,
		speed_floor=cfg.merge_speed_floor,
	)
	state._pos[i] = (mi * state._pos[i] + mj * state._pos[j]) / total
	state._vel[i] = vel
	state._mass[i] = total
	state._alive[j] = False
	return clamped


def merge_collisions(state: "SimulationState", report: TickReport | None = None) -> List[Tuple[int, int]]:
	merges: List[Tuple[int, int]] = []
	if state.n_alive < 2:
		return merges

	contacts = pair_overlaps(state._pos, state.radii(), state._alive)
	if not np.any(contacts):
		return merges

	for i in range(state.n_rows):
		if not state._alive[i]:
			continue
		# row i is untouched until its own turn, so the pre-filter is exact for the first scan
		if not np.any(contacts[i, i + 1:]):
			continue
		start = i + 1
		while True:
			j = _first_contact(state, i, start)
			if j < 0:
				break
			clamped = _merge_into(state, i, j)
			merges.append((int(state._uid[i]), int(state._uid[j])))
			if report is not None and clamped:
				report.clamped_merges += 1
			start = j + 1

	if report is not None:
		report.merges.extend(merges)
	return merges


def tick(state: "SimulationState", dt: float) -> TickReport:
	report = TickReport(dt=float(dt))
	dt = float(dt)
	if not (dt > 0.0 and math.isfinite(dt)):
		return report

	n_sub, h = substep_schedule(state.cfg, dt)
	level = state.economy.gravity_level()

	for _ in range(n_sub):
		absorb(state, report)
		integrate(state, h, level)
		report.substeps += 1

	merge_collisions(state, report)
	report.removed = state.compact()

	state.time += dt
	state.tick_count += 1

	if report.absorbed or report.merges:
		logger.debug("tick %d: absorbed %d (+%.2f mass), merged %d, %d alive",
					 state.tick_count, report.absorbed, report.credited_mass,
					 len(report.merges), state.n_alive)
	return report
