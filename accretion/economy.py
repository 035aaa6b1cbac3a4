"""
This module implements the progression economy: the three upgrade tracks, their cost
curve, purchase validation and the gravity multiplier derived from accumulated mass.

UpgradeTrackId tags the tracks (click yield, particle mass, spawn speed). Each track's
pricing and cap live as TrackSpec data in the configuration and are dispatched through
one lookup table, so a purchase is the same code path for every track. cost() prices
a level as floor(base * growth^(level-1)). Economy.purchase() either rejects with a
reason and leaves every value untouched, or spends the mass on the CentralBody and raises
the level. The derived quantities (particles per spawn, particle mass, cooldown length)
are read from the current levels on demand, so nothing goes stale after a purchase.
gravity_level() maps the saturation mass/max_mass onto [1, max_multiplier] along a
square-root curve.
"""

from __future__ import annotations
import enum
import logging
import math
from dataclasses import dataclass
from typing import Dict

from .central_body import CentralBody
from .sim_config import CLICK_YIELD, PARTICLE_MASS, SPAWN_SPEED, GameConfig, TrackSpec

logger = logging.getLogger(__name__)


class UpgradeTrackId(str, enum.Enum):
	CLICK_YIELD = CLICK_YIELD
	PARTICLE_MASS = PARTICLE_MASS
	SPAWN_SPEED = SPAWN_SPEED


@dataclass(frozen=True)
class PurchaseResult:
	accepted: bool
	track: UpgradeTrackId
	level: int
	cost: int | None
	reason: str = ""


def cost(spec: TrackSpec, level: int) -> int:
	return int(math.floor(spec.base_cost * spec.growth ** (int(level) - 1)))


def gravity_level(mass: float, max_mass: float, max_multiplier: float = 10.0) -> float:
	if max_mass <= 0.0:
		return 1.0
	frac = min(max(float(mass) / float(max_mass), 0.0), 1.0)
	return 1.0 + (float(max_multiplier) - 1.0) * math.sqrt(frac)


class UpgradeTrack:
	__slots__ = ("track_id", "spec", "level")

	def __init__(self, track_id: UpgradeTrackId, spec: TrackSpec, level: int = 1) -> None:
		self.track_id = track_id
		self.spec = spec
		self.level = min(max(int(level), 1), spec.cap)

	@property
	def maxed(self) -> bool:
		return self.level >= self.spec.cap

	def next_cost(self) -> int | None:
		if self.maxed:
			return None
		return cost(self.spec, self.level)

	def __repr__(self) -> str:
		return f"UpgradeTrack({self.track_id.value}, level={self.level}/{self.spec.cap})"


class Economy:

	def __init__(self, cfg: GameConfig, body: CentralBody) -> None:
		self.cfg = cfg
		self.body = body
		self.tracks: Dict[UpgradeTrackId, UpgradeTrack] = {
			tid: UpgradeTrack(tid, cfg.tracks[tid.value]) for tid in UpgradeTrackId
		}

	def level(self, track_id: UpgradeTrackId) -> int:
		return self.tracks[UpgradeTrackId(track_id)].level

	def purchase(self, track_id: UpgradeTrackId) -> PurchaseResult:
		track = self.tracks[UpgradeTrackId(track_id)]

		if track.maxed:
			return PurchaseResult(False, track.track_id, track.level, None, "maxed")

		price = cost(track.spec, track.level)
		if self.body.mass < price:
			return PurchaseResult(False, track.track_id, track.level, price, "insufficient_mass")

		self.body.spend(price)
		track.level += 1
		logger.debug("purchased %s -> level %d for %d (mass left %.1f)",
					 track.track_id.value, track.level, price, self.body.mass)
		return PurchaseResult(True, track.track_id, track.level, price)

	def gravity_level(self, mass: float | None = None) -> float:
		if mass is None:
			mass = self.body.mass
		return gravity_level(mass, self.cfg.max_mass, self.cfg.max_gravity_multiplier)

	def particles_per_spawn(self) -> int:
		return int(self.cfg.yield_per_level) * self.level(UpgradeTrackId.CLICK_YIELD)

	def particle_mass(self) -> float:
		return float(self.cfg.particle_mass_per_level) * self.level(UpgradeTrackId.PARTICLE_MASS)

	def cooldown_duration(self, speed_level: int | None = None) -> float:
		if speed_level is None:
			speed_level = self.level(UpgradeTrackId.SPAWN_SPEED)
		return cooldown_duration(self.cfg, speed_level)

	def copy(self, body: CentralBody) -> "Economy":
		new = Economy(self.cfg, body)
		for tid, track in self.tracks.items():
			new.tracks[tid].level = track.level
		return new


def cooldown_duration(cfg: GameConfig, speed_level: int) -> float:
	raw = float(cfg.base_cooldown) - float(cfg.cooldown_step) * (int(speed_level) - 1)
	return max(float(cfg.min_cooldown), raw)
