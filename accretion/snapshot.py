from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

"""
This module defines the read-only view handed to the renderer once per frame. FrameSnapshot carries the central body (mass, radius, center), the gravity level, every live particle as a ParticleSnapshot, the cooldown progress, the auto-play flag and one TrackSnapshot per upgrade track. Everything is a frozen copy, so the renderer cannot reach back into the simulation arrays. A maxed track reports next_cost=None together with maxed=True.

"""


@dataclass(frozen=True)
class ParticleSnapshot:
    uid: int
    x: float
    y: float
    radius: float
    mass: float
    color_seed: int


@dataclass(frozen=True)
class TrackSnapshot:
    track: str
    label: str
    level: int
    cap: int
    next_cost: int | None
    maxed: bool
    affordable: bool


@dataclass(frozen=True)
class FrameSnapshot:
    tick: int
    time: float
    mass: float
    max_mass: float
    radius: float
    center: Tuple[float, float]
    gravity_level: float
    particles: Tuple[ParticleSnapshot, ...]
    particle_ceiling: int
    cooldown_fraction: float
    on_cooldown: bool
    auto_play: bool
    tracks: Tuple[TrackSnapshot, ...]

    @property
    def particle_count(self) -> int:
        return len(self.particles)

    def track(self, track_id: str) -> TrackSnapshot:
        key = getattr(track_id, "value", track_id)
        for t in self.tracks:
            if t.track == key:
                return t
        raise KeyError(key)
