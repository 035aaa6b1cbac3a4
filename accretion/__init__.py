"""
This initialization file serves as the main entry point for the accretion game core,
exposing its public API through a clean namespace.

It imports and re-exports the configuration (GameConfig, TrackSpec), the economy
(UpgradeTrackId, Economy, cost, gravity_level), the central body, the cooldown
scheduler, the SimulationState particle arena, the spawner and
the per-tick simulation step, the diagnostics and validation helpers, the controller
with its snapshot and event types, and the frame driver. Rendering lives in the optional
viewer module and is not imported here, so the core works without pygame installed.
"""

from .sim_config import GameConfig, TrackSpec
from .economy import (
    Economy,
    PurchaseResult,
    UpgradeTrack,
    UpgradeTrackId,
    cooldown_duration,
    cost,
    gravity_level,
)
from .central_body import CentralBody
from .cooldown import CooldownFSM, CooldownScheduler

from .simulation_state import SimulationState
from .spawner import SpawnOutcome, Spawner
from .step import TickReport, absorb, integrate, merge_collisions, tick
from .physics import merge_velocity, particle_radius

from .diagnostics import Diagnostics
from .state_validator import StateValidator

from .events import GameEvent
from .snapshot import FrameSnapshot, ParticleSnapshot, TrackSnapshot
from .controller import GameController
from .frame_driver import FrameDriver, FrameSurface, QueuedSurface
from .logging_config import setup_logging

__version__ = "0.1.0"




__all__ = [
    "GameConfig",
    "TrackSpec",
    "Economy",
    "PurchaseResult",
    "UpgradeTrack",
    "UpgradeTrackId",
    "cooldown_duration",
    "cost",
    "gravity_level",
    "CentralBody",
    "CooldownFSM",
    "CooldownScheduler",
    "SimulationState",
    "SpawnOutcome",
    "Spawner",
    "TickReport",
    "absorb",
    "integrate",
    "merge_collisions",
    "tick",
    "merge_velocity",
    "particle_radius",
    "Diagnostics",
    "StateValidator",
    "GameEvent",
    "FrameSnapshot",
    "ParticleSnapshot",
    "TrackSnapshot",
    "GameController",
    "FrameDriver",
    "FrameSurface",
    "QueuedSurface",
    "setup_logging",
]
