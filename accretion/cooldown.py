from __future__ import annotations

from statemachine import State, StateMachine

"""
This module gates spawn requests in time. CooldownFSM is the two-state machine (idle,
on_cooldown) and only guards transitions; CooldownScheduler owns the timing around it.
A cooldown's duration is fixed when it starts, so a speed upgrade bought mid-cooldown
only shortens the next one. Expiry is polled once per frame rather than scheduled, and
try_start polls first so a request landing exactly on the end time is accepted. Requests
made while on cooldown are dropped, never queued. All times are seconds on whatever
monotonic clock the caller supplies.
"""


IDLE = "idle"
ON_COOLDOWN = "on_cooldown"


class CooldownFSM(StateMachine):
	idle = State(IDLE, value=IDLE, initial=True)
	on_cooldown = State(ON_COOLDOWN, value=ON_COOLDOWN)

	begin = idle.to(on_cooldown)
	expire = on_cooldown.to(idle)

	def __init__(self, start_value: str = IDLE):
		super().__init__(start_value=start_value)

	@property
	def state_value(self) -> str:
		return str(self.current_state.value)


class CooldownScheduler:

	def __init__(self, *, end_time: float = 0.0, duration: float = 0.0, started_at: float = 0.0, active: bool = False) -> None:
		self.end_time = float(end_time)
		self.duration = float(duration)
		self.started_at = float(started_at)
		self._fsm = CooldownFSM(ON_COOLDOWN if active else IDLE)

	@property
	def state(self) -> str:
		return self._fsm.state_value

	@property
	def active(self) -> bool:
		return self._fsm.state_value == ON_COOLDOWN

	def poll(self, now: float) -> bool:
		if self.active and float(now) >= self.end_time:
			self._fsm.expire()
			return True
		return False

	def is_ready(self, now: float) -> bool:
		self.poll(now)
		return not self.active

	def try_start(self, now: float, duration: float) -> bool:
		if not self.is_ready(now):
			return False
		now = float(now)
		self.duration = max(float(duration), 0.0)
		self.started_at = now
		self.end_time = now + self.duration
		self._fsm.begin()
		# zero-length cooldowns leave the scheduler idle
		self.poll(now)
		return True

	def fraction_elapsed(self, now: float) -> float:
		if not self.active or self.duration <= 0.0:
			return 1.0
		frac = (float(now) - self.started_at) / self.duration
		return min(max(frac, 0.0), 1.0)

	def remaining(self, now: float) -> float:
		if not self.active:
			return 0.0
		return max(self.end_time - float(now), 0.0)

	def copy(self) -> "CooldownScheduler":
		return CooldownScheduler(
			end_time=self.end_time,
			duration=self.duration,
			started_at=self.started_at,
			active=self.active,
		)

	def __repr__(self) -> str:
		return f"CooldownScheduler(state={self.state}, end_time={self.end_time}, duration={self.duration})"
