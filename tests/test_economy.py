from __future__ import annotations

import math

import numpy as np
import pytest

from accretion import (
    CentralBody,
    Economy,
    GameConfig,
    TrackSpec,
    UpgradeTrackId,
    cooldown_duration,
    cost,
    gravity_level,
)
from accretion.sim_config import CLICK_YIELD, PARTICLE_MASS, SPAWN_SPEED


def _economy(cfg: GameConfig, mass: float = 0.0) -> Economy:
    body = CentralBody(mass, base_radius=cfg.central_base_radius, radius_gain=cfg.central_radius_gain, max_mass=cfg.max_mass)
    return Economy(cfg, body)


@pytest.mark.parametrize("track", [CLICK_YIELD, PARTICLE_MASS, SPAWN_SPEED])
def test_cost_strictly_increasing_over_every_level(cfg: GameConfig, track: str) -> None:
    spec = cfg.tracks[track]
    prices = [cost(spec, level) for level in range(1, spec.cap + 1)]
    assert all(a < b for a, b in zip(prices, prices[1:]))
    assert prices == [cost(spec, level) for level in range(1, spec.cap + 1)]


def test_cost_follows_floored_exponential() -> None:
    spec = TrackSpec(base_cost=10.0, growth=1.5, cap=10)
    assert [cost(spec, lv) for lv in (1, 2, 3, 4)] == [10, 15, 22, 33]
    assert isinstance(cost(spec, 5), int)


def test_purchase_exactly_at_cost_succeeds(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=10.0)
    result = eco.purchase(UpgradeTrackId.CLICK_YIELD)

    assert result.accepted
    assert result.cost == 10
    assert result.level == 2
    assert eco.body.mass == 0.0
    assert eco.level(UpgradeTrackId.CLICK_YIELD) == 2


def test_purchase_one_unit_below_cost_fails_without_mutation(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=9.0)
    result = eco.purchase(UpgradeTrackId.CLICK_YIELD)

    assert not result.accepted
    assert result.reason == "insufficient_mass"
    assert eco.body.mass == 9.0
    assert eco.level(UpgradeTrackId.CLICK_YIELD) == 1


def test_purchase_never_drives_mass_negative(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=1000.0)
    for _ in range(200):
        for tid in UpgradeTrackId:
            eco.purchase(tid)
            assert eco.body.mass >= 0.0


def test_level_never_exceeds_cap() -> None:
    cfg = GameConfig()
    cfg.tracks[SPAWN_SPEED] = TrackSpec(base_cost=2.0, growth=2.0, cap=3)
    eco = _economy(cfg, mass=cfg.max_mass)

    results = [eco.purchase(UpgradeTrackId.SPAWN_SPEED) for _ in range(10)]

    assert eco.level(UpgradeTrackId.SPAWN_SPEED) == 3
    assert [r.accepted for r in results[:2]] == [True, True]
    assert all(not r.accepted and r.reason == "maxed" for r in results[2:])
    # 2 + 4 spent, nothing after the cap
    assert eco.body.mass == cfg.max_mass - 6.0


def test_purchase_recomputes_central_radius(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=400.0)
    before = eco.body.radius
    eco.purchase(UpgradeTrackId.PARTICLE_MASS)

    assert eco.body.mass == 375.0
    assert eco.body.radius < before
    assert eco.body.radius == pytest.approx(cfg.central_base_radius + cfg.central_radius_gain * math.sqrt(375.0))


def test_track_ids_accept_plain_strings(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=100.0)
    assert eco.purchase("particle_mass").accepted
    assert eco.particle_mass() == 2.0 * cfg.particle_mass_per_level


def test_gravity_level_monotonic_and_saturating(cfg: GameConfig) -> None:
    masses = np.linspace(0.0, cfg.max_mass, 501)
    levels = [gravity_level(m, cfg.max_mass, cfg.max_gravity_multiplier) for m in masses]

    assert levels[0] == 1.0
    assert levels[-1] == pytest.approx(cfg.max_gravity_multiplier)
    assert all(a <= b for a, b in zip(levels, levels[1:]))
    assert gravity_level(cfg.max_mass * 3, cfg.max_mass, cfg.max_gravity_multiplier) == pytest.approx(cfg.max_gravity_multiplier)


def test_cooldown_duration_shrinks_then_clamps(cfg: GameConfig) -> None:
    durations = [cooldown_duration(cfg, lv) for lv in range(1, 60)]
    assert durations[0] == cfg.base_cooldown
    assert all(a >= b for a, b in zip(durations, durations[1:]))
    assert durations[-1] == cfg.min_cooldown


def test_yield_and_mass_follow_levels(cfg: GameConfig) -> None:
    eco = _economy(cfg, mass=1000.0)
    assert eco.particles_per_spawn() == 1
    eco.purchase(UpgradeTrackId.CLICK_YIELD)
    eco.purchase(UpgradeTrackId.CLICK_YIELD)
    assert eco.particles_per_spawn() == 3


def test_config_validation_reports_problems() -> None:
    cfg = GameConfig(spawn_policy="drop", orbit_speed_fraction=1.2)
    cfg.tracks[CLICK_YIELD] = TrackSpec(base_cost=1.0, growth=1.5, cap=5)
    problems = cfg.validate()

    assert any("spawn_policy" in p for p in problems)
    assert any("orbit_speed_fraction" in p for p in problems)
    assert any("strictly rising" in p for p in problems)
    assert GameConfig().validate() == []


@pytest.mark.parametrize("overrides, fragment", [
    ({"drag_floor": 0.05}, "drag"),
    ({"drag_floor": 0.9}, "drag"),
    ({"base_drag": 1.0}, "drag"),
    ({"merge_speed_floor": -3.0}, "merge_speed_floor"),
    ({"merge_speed_floor": 0.0}, "merge_speed_floor"),
    ({"merge_speed_floor": 1.5}, "merge_speed_floor"),
])
def test_config_validation_bounds_drag_and_merge_floor(overrides, fragment) -> None:
    problems = GameConfig(**overrides).validate()
    assert any(fragment in p for p in problems)


def test_config_accepts_edges_of_drag_and_merge_floor() -> None:
    assert GameConfig(drag_floor=0.91, base_drag=0.91, merge_speed_floor=1.0).validate() == []


def test_config_copy_is_independent() -> None:
    cfg = GameConfig()
    other = cfg.copy()
    other.max_particles = 3
    other.tracks[CLICK_YIELD] = TrackSpec(base_cost=50.0, growth=2.0, cap=2)

    assert cfg.max_particles == 400
    assert cfg.tracks[CLICK_YIELD].base_cost == 10.0


def test_central_body_clamps_mass_changes(cfg: GameConfig) -> None:
    body = CentralBody(5.0, 10.0, 20.0, base_radius=cfg.central_base_radius, radius_gain=cfg.central_radius_gain, max_mass=100.0)

    assert body.absorb(200.0) == pytest.approx(95.0)
    assert body.mass == 100.0
    assert body.spend(150.0) == 0.0
    assert body.spend(40.0) == 40.0
    assert body.radius == pytest.approx(cfg.central_base_radius + cfg.central_radius_gain * math.sqrt(60.0))

    body.move_to(1.0, 2.0)
    assert body.center == (1.0, 2.0)
    assert body.copy().mass == body.mass
