from __future__ import annotations

import logging

import numpy as np
import pytest

from accretion import GameConfig, GameController, SimulationState, Spawner, UpgradeTrackId
from accretion.physics import acceleration_magnitude, circular_speed


def test_spawned_particles_sit_in_band_with_sub_orbital_tangential_speed(state: SimulationState) -> None:
    outcome = Spawner(state).spawn(50)
    assert outcome.spawned == 50

    cfg = state.cfg
    inner, outer = state.spawn_band()
    center = np.asarray(state.body.center)
    rel = state.pos - center
    r = np.linalg.norm(rel, axis=1)

    assert np.all(r >= inner) and np.all(r <= outer)
    assert inner >= state.body.radius
    assert outer <= 0.5 * min(state.viewport)

    # tangential: velocity is perpendicular to the radius vector
    radial = np.einsum("ij,ij->i", rel, state.vel) / r
    assert np.allclose(radial, 0.0, atol=1e-9)

    accel = acceleration_magnitude(state.mass, cfg.gravity_constant, state.economy.gravity_level(), cfg.mass_gravity_gain)
    expected = cfg.orbit_speed_fraction * circular_speed(accel, r)
    assert np.allclose(np.linalg.norm(state.vel, axis=1), expected)
    assert np.all(np.linalg.norm(state.vel, axis=1) < circular_speed(accel, r))


def test_spawn_uses_current_particle_mass_level(state: SimulationState) -> None:
    state.body.absorb(1000.0)
    assert state.economy.purchase(UpgradeTrackId.PARTICLE_MASS).accepted

    Spawner(state).spawn(4)

    assert np.all(state.mass == 2.0 * state.cfg.particle_mass_per_level)


def test_cap_policy_trims_to_remaining_capacity() -> None:
    st = SimulationState(GameConfig(max_particles=5, spawn_policy="cap", seed=3))
    sp = Spawner(st)

    first = sp.spawn(3)
    second = sp.spawn(3)
    third = sp.spawn(3)

    assert (first.spawned, first.reason) == (3, "")
    assert (second.spawned, second.reason) == (2, "capped")
    assert (third.spawned, third.reason) == (0, "ceiling")
    assert st.n_alive == 5


def test_reject_policy_refuses_oversized_requests() -> None:
    st = SimulationState(GameConfig(max_particles=5, spawn_policy="reject", seed=3))
    sp = Spawner(st)

    assert sp.spawn(3).spawned == 3
    refused = sp.spawn(3)
    assert refused.spawned == 0 and refused.reason == "ceiling"
    assert st.n_alive == 3

    # exactly filling the ceiling is allowed
    assert sp.spawn(2).spawned == 2
    assert st.n_alive == 5
    assert sp.spawn(1).spawned == 0


def test_band_stays_valid_on_tiny_viewport() -> None:
    st = SimulationState(GameConfig(viewport_width=40.0, viewport_height=30.0, seed=1))
    inner, outer = st.spawn_band()
    assert outer == inner + 1.0

    Spawner(st).spawn(5)
    assert st.n_alive == 5


@pytest.mark.parametrize("policy", ["cap", "reject"])
def test_ceiling_never_exceeded_by_any_request_sequence(policy: str) -> None:
    cfg = GameConfig(max_particles=12, spawn_policy=policy, base_cooldown=0.1, min_cooldown=0.1, seed=8)
    ctl = GameController(cfg)
    ctl.state.body.absorb(10_000.0)
    rng = np.random.default_rng(0)

    for step in range(400):
        if rng.random() < 0.3:
            ctl.purchase(UpgradeTrackId.CLICK_YIELD)
        if rng.random() < 0.5:
            ctl.request_spawn()
        if step % 50 == 0:
            ctl.toggle_auto_play()
        ctl.tick(cfg.frame_dt)
        assert ctl.state.n_alive <= cfg.max_particles
        assert ctl.snapshot().particle_count <= cfg.max_particles


def test_collapsed_band_on_tiny_viewport_is_logged(state: SimulationState, caplog) -> None:
    state.resize(80.0, 60.0)

    with caplog.at_level(logging.DEBUG, logger="accretion.simulation_state"):
        inner, outer = state.spawn_band()

    assert inner == pytest.approx(state.body.radius + state.cfg.spawn_margin)
    assert outer == pytest.approx(inner + 1.0)
    assert "spawn band collapsed" in caplog.text

    Spawner(state).spawn(5)
    d = np.linalg.norm(state.pos - np.asarray(state.body.center), axis=1)
    assert np.all(d >= inner - 1e-9) and np.all(d <= outer + 1e-9)
