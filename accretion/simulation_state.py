"""
This module holds SimulationState, the single aggregate that carries all mutable game
state.

The particles are stored the way an N-body core stores bodies: parallel numpy arrays for
positions, velocities and masses, plus an alive mask, creation ids and color seeds. Rows
are never removed while a tick is running; a tick only clears alive flags and compact()
drops the dead rows once the tick has finished. Alongside the arrays the aggregate owns
the CentralBody, the Economy with its upgrade levels, the CooldownScheduler, the
auto-play flag, the viewport and the random generator. copy() produces a fully
independent replica (generator state included) so that two copies advanced with the
same inputs stay identical.
"""

from __future__ import annotations
import copy
import logging
from typing import Iterable, Tuple

import numpy as np

from .central_body import CentralBody
from .cooldown import CooldownScheduler
from .economy import Economy
from .physics import particle_radius
from .sim_config import GameConfig

logger = logging.getLogger(__name__)




class SimulationState:

	def __init__(self, cfg: GameConfig | None = None, *, seed: int | None = None):
		self.cfg: GameConfig = cfg if cfg is not None else GameConfig()
		cfg = self.cfg

		self.viewport: Tuple[float, float] = (float(cfg.viewport_width), float(cfg.viewport_height))
		self.body = CentralBody(
			cfg.initial_mass,
			self.viewport[0] / 2.0,
			self.viewport[1] / 2.0,
			base_radius=cfg.central_base_radius,
			radius_gain=cfg.central_radius_gain,
			max_mass=cfg.max_mass,
		)
		self.economy = Economy(cfg, self.body)
		self.cooldown = CooldownScheduler()
		self.auto_play: bool = False
		self.time: float = 0.0
		self.tick_count: int = 0
		self.next_uid: int = 0
		self.rng = np.random.default_rng(seed if seed is not None else cfg.seed)

		self._mass: np.ndarray = np.empty(0, dtype=np.float64)
		self._pos: np.ndarray = np.empty((0, 2), dtype=np.float64)
		self._vel: np.ndarray = np.empty((0, 2), dtype=np.float64)
		self._alive: np.ndarray = np.empty(0, dtype=bool)
		self._uid: np.ndarray = np.empty(0, dtype=np.int64)
		self._color: np.ndarray = np.empty(0, dtype=np.int64)

	@property
	def pos(self) -> np.ndarray:
		return self._pos

	@property
	def vel(self) -> np.ndarray:
		return self._vel

	@property
	def mass(self) -> np.ndarray:
		return self._mass

	@property
	def alive(self) -> np.ndarray:
		return self._alive

	@property
	def uids(self) -> np.ndarray:
		return self._uid

	@property
	def colors(self) -> np.ndarray:
		return self._color

	@property
	def n_rows(self) -> int:
		return int(self._mass.shape[0])

	@property
	def n_alive(self) -> int:
		return int(np.count_nonzero(self._alive))

	@property
	def capacity_left(self) -> int:
		return max(int(self.cfg.max_particles) - self.n_alive, 0)

	def radii(self) -> np.ndarray:
		return particle_radius(self._mass, self.cfg.particle_base_radius, self.cfg.particle_radius_gain)

	def spawn_band(self) -> Tuple[float, float]:
		inner = self.body.radius + float(self.cfg.spawn_margin)
		outer = 0.5 * min(self.viewport) * float(self.cfg.spawn_band_outer_fraction)
		if outer <= inner:
			logger.debug("spawn band collapsed (inner %.1f >= outer %.1f in a %gx%g viewport); using a 1px band",
						 inner, outer, self.viewport[0], self.viewport[1])
			outer = inner + 1.0
		return inner, outer

	def resize(self, width: float, height: float) -> bool:
		width = float(width)
		height = float(height)
		if not (width > 0.0 and height > 0.0):
			logger.warning("ignoring viewport resize to %sx%s", width, height)
			return False
		self.viewport = (width, height)
		self.body.move_to(width / 2.0, height / 2.0)
		return True

	def append(
		self,
		masses: Iterable[float],
		positions: Iterable[Tuple[float, float]],
		velocities: Iterable[Tuple[float, float]],
		colors: Iterable[int] | None = None,
	) -> np.ndarray:
		m = np.asarray(list(masses), dtype=np.float64).ravel()
		n = int(m.size)
		if n == 0:
			return np.empty(0, dtype=np.int64)
		p = np.asarray(list(positions), dtype=np.float64).reshape(-1, 2)
		v = np.asarray(list(velocities), dtype=np.float64).reshape(-1, 2)
		if colors is None:
			c = np.zeros(n, dtype=np.int64)
		else:
			c = np.asarray(list(colors), dtype=np.int64).ravel()
		if p.shape[0] != n or v.shape[0] != n or c.size != n:
			logger.warning("append: inconsistent particle batch (%d masses, %d positions, %d velocities)",
						   n, p.shape[0], v.shape[0])
			return np.empty(0, dtype=np.int64)
		if np.any(m <= 0) or not np.all(np.isfinite(m)):
			logger.warning("append: all particle masses must be positive finite numbers")
			return np.empty(0, dtype=np.int64)

		uids = np.arange(self.next_uid, self.next_uid + n, dtype=np.int64)
		self.next_uid += n

		self._mass = np.concatenate([self._mass, m])
		self._pos = np.concatenate([self._pos, p])
		self._vel = np.concatenate([self._vel, v])
		self._alive = np.concatenate([self._alive, np.ones(n, dtype=bool)])
		self._uid = np.concatenate([self._uid, uids])
		self._color = np.concatenate([self._color, c])
		return uids

	def compact(self) -> int:
		keep = self._alive
		removed = int(keep.size - np.count_nonzero(keep))
		if removed == 0:
			return 0
		self._mass = self._mass[keep]
		self._pos = self._pos[keep]
		self._vel = self._vel[keep]
		self._uid = self._uid[keep]
		self._color = self._color[keep]
		self._alive = np.ones(self._mass.shape[0], dtype=bool)
		return removed

	def copy(self) -> "SimulationState":
		new = object.__new__(SimulationState)
		new.cfg = self.cfg
		new.viewport = self.viewport
		new.body = self.body.copy()
		new.economy = self.economy.copy(new.body)
		new.cooldown = self.cooldown.copy()
		new.auto_play = self.auto_play
		new.time = self.time
		new.tick_count = self.tick_count
		new.next_uid = self.next_uid
		new.rng = copy.deepcopy(self.rng)
		new._mass = self._mass.copy()
		new._pos = self._pos.copy()
		new._vel = self._vel.copy()
		new._alive = self._alive.copy()
		new._uid = self._uid.copy()
		new._color = self._color.copy()
		return new
