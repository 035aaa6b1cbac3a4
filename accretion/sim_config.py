from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

"""
This central configuration module defines every tunable of the game through the GameConfig dataclass. Key parameters include the central body growth curve and mass cap, gravity scaling, drag and the mass-dependent drag floor, the spawn annulus and sub-orbital speed fraction, the particle ceiling with its overflow policy, the merge speed clamp, frame timing and substep limits, cooldown timing, and the per-track upgrade tables held as TrackSpec rows. The class provides a copy method for configuration inheritance and a validate method that reports every inconsistent value instead of raising. It serves as the single source of truth for game behavior, with all components referencing this configuration.

"""

_ALLOWED_SPAWN_POLICIES = {
    "cap",
    "reject",
}

CLICK_YIELD = "click_yield"
PARTICLE_MASS = "particle_mass"
SPAWN_SPEED = "spawn_speed"


@dataclass(frozen=True)
class TrackSpec:
    base_cost: float
    growth: float
    cap: int
    label: str = ""


def _default_tracks() -> Dict[str, TrackSpec]:
    return {
        CLICK_YIELD:   TrackSpec(base_cost=10.0, growth=1.5, cap=40, label="Particles per spawn"),
        PARTICLE_MASS: TrackSpec(base_cost=25.0, growth=1.6, cap=30, label="Particle mass"),
        SPAWN_SPEED:   TrackSpec(base_cost=15.0, growth=1.55, cap=20, label="Spawn speed"),
    }


@dataclass
class GameConfig:
    central_base_radius: float = 12.0
    central_radius_gain: float = 0.35
    max_mass: float = 1.0e6
    initial_mass: float = 0.0

    gravity_constant: float = 0.012
    max_gravity_multiplier: float = 10.0
    mass_gravity_gain: float = 0.15

    base_drag: float = 0.9985
    drag_per_mass: float = 0.0004
    drag_floor: float = 0.985

    particle_base_radius: float = 1.5
    particle_radius_gain: float = 1.0
    particle_mass_per_level: float = 1.0
    yield_per_level: int = 1

    spawn_margin: float = 40.0
    spawn_band_outer_fraction: float = 0.9
    orbit_speed_fraction: float = 0.82
    max_particles: int = 400
    spawn_policy: str = "cap"

    merge_keep_speed: bool = True
    merge_speed_floor: float = 0.85

    min_distance_epsilon: float = 1.0e-6
    frame_dt: float = 1.0 / 60.0
    max_step_scale: float = 2.0
    max_substeps: int = 8

    base_cooldown: float = 1.0
    cooldown_step: float = 0.045
    min_cooldown: float = 0.1

    viewport_width: float = 1000.0
    viewport_height: float = 1000.0

    seed: int | None = None
    enable_runtime_guard: bool = False

    tracks: Dict[str, TrackSpec] = field(default_factory=_default_tracks)

    def copy(self) -> "GameConfig":
        new = object.__new__(GameConfig)
        new.__dict__ = dict(getattr(self, "__dict__", {}))
        new.tracks = dict(self.tracks)
        return new

    def validate(self) -> List[str]:
        problems: List[str] = []

        if self.spawn_policy not in _ALLOWED_SPAWN_POLICIES:
            problems.append(f"spawn_policy must be one of {sorted(_ALLOWED_SPAWN_POLICIES)}, got {self.spawn_policy!r}")
        if not self.max_mass > 0.0:
            problems.append("max_mass must be positive")
        if not 0.0 <= self.initial_mass <= self.max_mass:
            problems.append("initial_mass must lie in [0, max_mass]")
        if not self.max_gravity_multiplier >= 1.0:
            problems.append("max_gravity_multiplier must be >= 1")
        if not 0.0 < self.orbit_speed_fraction < 1.0:
            problems.append("orbit_speed_fraction must lie in (0, 1)")
        if not 0.9 < self.drag_floor <= self.base_drag < 1.0:
            problems.append("drag must satisfy 0.9 < drag_floor <= base_drag < 1")
        if not 0.0 < self.merge_speed_floor <= 1.0:
            problems.append("merge_speed_floor must lie in (0, 1]")
        if self.drag_per_mass < 0.0:
            problems.append("drag_per_mass must be non-negative")
        if self.max_particles < 1:
            problems.append("max_particles must be at least 1")
        if self.yield_per_level < 1:
            problems.append("yield_per_level must be at least 1")
        if not self.particle_mass_per_level > 0.0:
            problems.append("particle_mass_per_level must be positive")
        if not 0.0 < self.min_cooldown <= self.base_cooldown:
            problems.append("cooldown must satisfy 0 < min_cooldown <= base_cooldown")
        if self.cooldown_step < 0.0:
            problems.append("cooldown_step must be non-negative")
        if not self.frame_dt > 0.0 or not self.max_step_scale > 0.0:
            problems.append("frame_dt and max_step_scale must be positive")
        if self.max_substeps < 1:
            problems.append("max_substeps must be at least 1")
        if not 0.0 < self.spawn_band_outer_fraction <= 1.0:
            problems.append("spawn_band_outer_fraction must lie in (0, 1]")
        if self.viewport_width <= 0.0 or self.viewport_height <= 0.0:
            problems.append("viewport dimensions must be positive")

        for key in (CLICK_YIELD, PARTICLE_MASS, SPAWN_SPEED):
            spec = self.tracks.get(key)
            if spec is None:
                problems.append(f"missing upgrade track {key!r}")
                continue
            if spec.cap < 1:
                problems.append(f"track {key!r}: cap must be at least 1")
            if not spec.growth > 1.0:
                problems.append(f"track {key!r}: growth must exceed 1")
            # floor(c*g) > floor(c) whenever c*(g-1) >= 1
            if spec.base_cost * (spec.growth - 1.0) < 1.0:
                problems.append(f"track {key!r}: base_cost*(growth-1) must be >= 1 for a strictly rising cost curve")

        return problems
