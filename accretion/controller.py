"""
This module implements GameController, the single owner and writer of a game's
SimulationState.

Every mutation goes through the controller: the UI commands (request_spawn, purchase,
toggle_auto_play, on_viewport_resize) and tick(), which advances the simulation, polls
the cooldown and lets auto-play issue its spawn. If a command arrives while a tick is
being applied (for example from a callback fired inside the tick) it is queued and
applied as soon as the tick has finished, so no command ever sees a half-applied frame.
Time is simulation time, the sum of the dt values passed to tick(), which keeps a run
fully reproducible for a given seed.

Outcomes the player should see (denied purchases, dropped spawns, absorptions) are
appended to an outbox of GameEvent entries that the presentation layer drains once per
frame. Policy rejections are returned as values and never raised; only an invalid
GameConfig raises, at construction time.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, List, Tuple

from .economy import PurchaseResult, UpgradeTrackId
from .events import EventType, GameEvent
from .sim_config import GameConfig
from .simulation_state import SimulationState
from .snapshot import FrameSnapshot, ParticleSnapshot, TrackSnapshot
from .spawner import SpawnOutcome, Spawner
from .state_validator import StateValidator
from .step import TickReport, tick as step_tick

logger = logging.getLogger(__name__)


class GameController:

	def __init__(self, cfg: GameConfig | None = None, *, seed: int | None = None) -> None:
		cfg = cfg if cfg is not None else GameConfig()
		problems = cfg.validate()
		if problems:
			raise ValueError("invalid GameConfig: " + "; ".join(problems))

		self.cfg = cfg
		self.state = SimulationState(cfg, seed=seed)
		self._spawner = Spawner(self.state)
		self._events: List[GameEvent] = []
		self._pending: Deque[Tuple[Callable[..., Any], tuple]] = deque()
		self._in_tick = False

	@property
	def now(self) -> float:
		return self.state.time

	@property
	def in_tick(self) -> bool:
		return self._in_tick

	def _emit(self, type: EventType, **payload: Any) -> None:
		self._events.append(GameEvent.at(type=type, tick=self.state.tick_count, ts=self.state.time, payload=payload))

	def drain_events(self) -> List[GameEvent]:
		out, self._events = self._events, []
		return out

	def _defer(self, fn: Callable[..., Any], *args: Any) -> None:
		logger.debug("deferring %s until the current tick completes", fn.__name__)
		self._pending.append((fn, args))

	def _flush_pending(self) -> None:
		while self._pending:
			fn, args = self._pending.popleft()
			fn(*args)

	def request_spawn(self) -> SpawnOutcome | None:
		if self._in_tick:
			self._defer(self.request_spawn)
			return None
		return self._spawn(self.state.time)

	def _spawn(self, now: float) -> SpawnOutcome:
		state = self.state
		requested = state.economy.particles_per_spawn()

		if not state.cooldown.is_ready(now):
			self._emit("SPAWN_DROPPED", reason="cooldown", requested=requested)
			return SpawnOutcome(requested, 0, "cooldown")

		outcome = self._spawner.spawn(requested)
		if not outcome.accepted:
			self._emit("SPAWN_DROPPED", reason=outcome.reason, requested=requested)
			return outcome

		state.cooldown.try_start(now, state.economy.cooldown_duration())
		self._emit("SPAWNED", count=outcome.spawned, requested=requested, capped=outcome.reason == "capped")
		return outcome

	def purchase(self, track_id: UpgradeTrackId | str) -> PurchaseResult | None:
		if self._in_tick:
			self._defer(self.purchase, track_id)
			return None

		result = self.state.economy.purchase(UpgradeTrackId(track_id))
		if result.accepted:
			self._emit("PURCHASED", track=result.track.value, level=result.level, cost=result.cost)
			logger.info("upgrade %s -> level %d", result.track.value, result.level)
		else:
			self._emit("PURCHASE_DENIED", track=result.track.value, reason=result.reason, cost=result.cost)
		return result

	def toggle_auto_play(self) -> bool | None:
		if self._in_tick:
			self._defer(self.toggle_auto_play)
			return None
		self.state.auto_play = not self.state.auto_play
		self._emit("AUTO_PLAY_TOGGLED", enabled=self.state.auto_play)
		return self.state.auto_play

	def on_viewport_resize(self, width: float, height: float) -> bool | None:
		if self._in_tick:
			self._defer(self.on_viewport_resize, width, height)
			return None
		ok = self.state.resize(width, height)
		if ok:
			self._emit("VIEWPORT_RESIZED", width=float(width), height=float(height))
		return ok

	def tick(self, dt: float) -> TickReport:
		self._in_tick = True
		try:
			report = step_tick(self.state, dt)
			now = self.state.time
			self.state.cooldown.poll(now)
			if self.state.auto_play and not self.state.cooldown.active:
				outcome = self._spawner.spawn(self.state.economy.particles_per_spawn())
				if outcome.accepted:
					self.state.cooldown.try_start(now, self.state.economy.cooldown_duration())
					self._emit("SPAWNED", count=outcome.spawned, requested=outcome.requested,
							   capped=outcome.reason == "capped", auto=True)
		finally:
			self._in_tick = False

		if report.absorbed:
			self._emit("ABSORBED", count=report.absorbed, mass=report.absorbed_mass,
					   credited=report.credited_mass)
		if report.merges:
			self._emit("MERGED", count=len(report.merges), clamped=report.clamped_merges)

		if self.cfg.enable_runtime_guard:
			StateValidator.report_invalid_state(f"after tick {self.state.tick_count}", self.state)

		self._flush_pending()
		return report

	def snapshot(self) -> FrameSnapshot:
		state = self.state
		now = state.time
		radii = state.radii()

		particles = tuple(
			ParticleSnapshot(
				uid=int(state._uid[i]),
				x=float(state._pos[i, 0]),
				y=float(state._pos[i, 1]),
				radius=float(radii[i]),
				mass=float(state._mass[i]),
				color_seed=int(state._color[i]),
			)
			for i in range(state.n_rows) if state._alive[i]
		)

		tracks = []
		for tid, track in state.economy.tracks.items():
			nxt = track.next_cost()
			tracks.append(TrackSnapshot(
				track=tid.value,
				label=track.spec.label,
				level=track.level,
				cap=track.spec.cap,
				next_cost=nxt,
				maxed=nxt is None,
				affordable=nxt is not None and state.body.mass >= nxt,
			))

		return FrameSnapshot(
			tick=state.tick_count,
			time=state.time,
			mass=state.body.mass,
			max_mass=state.body.max_mass,
			radius=state.body.radius,
			center=state.body.center,
			gravity_level=state.economy.gravity_level(),
			particles=particles,
			particle_ceiling=int(self.cfg.max_particles),
			cooldown_fraction=state.cooldown.fraction_elapsed(now),
			on_cooldown=state.cooldown.active and now < state.cooldown.end_time,
			auto_play=state.auto_play,
			tracks=tuple(tracks),
		)
