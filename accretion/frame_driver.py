"""
This module drives a GameController from a display's refresh callback.

FrameDriver is the only piece that touches a rendering surface, and only to ask for the
next frame: each on_frame(timestamp) turns the distance to the previous timestamp into
dt, runs exactly one controller tick, and re-arms the surface while the driver is
running. The first frame after start() only records its timestamp. Any object with a
request_frame(callback) method can serve as the surface. QueuedSurface is the minimal
one; it holds the pending callback until the owning loop pumps it, which is how the
pygame viewer and the headless runner use it. run_fixed() skips the surface entirely and
steps a fixed dt, for tests and batch runs.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from .controller import GameController
from .step import TickReport

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], Optional[TickReport]]


class FrameSurface(Protocol):
	def request_frame(self, callback: FrameCallback) -> None: ...


class QueuedSurface:

	def __init__(self) -> None:
		self._pending: FrameCallback | None = None

	@property
	def has_pending(self) -> bool:
		return self._pending is not None

	def request_frame(self, callback: FrameCallback) -> None:
		self._pending = callback

	def pump(self, timestamp: float) -> Optional[TickReport]:
		cb, self._pending = self._pending, None
		if cb is None:
			return None
		return cb(timestamp)


class FrameDriver:

	def __init__(self, controller: GameController, surface: FrameSurface | None = None, *, max_dt: float | None = None) -> None:
		self.controller = controller
		self.surface = surface
		self.max_dt = max_dt
		self.running = False
		self.frames = 0
		self._last: float | None = None

	def start(self) -> None:
		if self.surface is None:
			logger.warning("FrameDriver.start() without a surface; use run_fixed() instead")
			return
		self.running = True
		self._last = None
		self.surface.request_frame(self.on_frame)

	def stop(self) -> None:
		self.running = False

	def on_frame(self, timestamp: float) -> Optional[TickReport]:
		if not self.running:
			return None

		report = None
		if self._last is not None:
			dt = float(timestamp) - self._last
			if self.max_dt is not None:
				dt = min(dt, float(self.max_dt))
			if dt > 0.0:
				report = self.controller.tick(dt)
				self.frames += 1
		self._last = float(timestamp)

		if self.running and self.surface is not None:
			self.surface.request_frame(self.on_frame)
		return report

	def run_fixed(self, n_frames: int, dt: float | None = None) -> List[TickReport]:
		if dt is None:
			dt = self.controller.cfg.frame_dt
		reports = []
		for _ in range(int(n_frames)):
			reports.append(self.controller.tick(dt))
			self.frames += 1
		return reports
