from __future__ import annotations

import logging

import numpy as np
import pytest

from accretion import Diagnostics, SimulationState, Spawner, StateValidator


def test_momentum_and_energy(state: SimulationState, place) -> None:
    place(state, 2.0, 100.0, 100.0, 1.0, 0.0)
    place(state, 1.0, 200.0, 100.0, 0.0, -2.0)
    diag = Diagnostics(state)

    assert diag.momentum() == pytest.approx([2.0, -2.0])
    assert diag.kinetic_energy() == pytest.approx(0.5 * 2.0 * 1.0 + 0.5 * 1.0 * 4.0)
    com_pos, com_vel = diag.center_of_mass()
    assert com_pos == pytest.approx([400.0 / 3.0, 100.0])
    assert com_vel == pytest.approx([2.0 / 3.0, -2.0 / 3.0])
    assert diag.particle_mass() == 3.0


def test_summary_on_empty_state(state: SimulationState) -> None:
    summary = Diagnostics(state).summary()
    assert summary["particles"] == 0.0
    assert summary["momentum"] == 0.0
    assert summary["mean_center_distance"] == 0.0
    assert summary["gravity_level"] == 1.0


def test_validator_accepts_fresh_and_spawned_states(state: SimulationState) -> None:
    assert StateValidator.state_is_valid(state)
    Spawner(state).spawn(20)
    assert StateValidator.problems(state) == []


def test_validator_flags_bad_rows(state: SimulationState, caplog) -> None:
    Spawner(state).spawn(3)
    state._mass[1] = -1.0
    state._pos[2, 0] = np.nan
    state.economy.tracks[next(iter(state.economy.tracks))].level = 999

    with caplog.at_level(logging.WARNING, logger="accretion.state_validator"):
        found = StateValidator.report_invalid_state("corrupted", state)

    assert any("masses" in p for p in found)
    assert any("finite" in p for p in found)
    assert any("level 999" in p for p in found)
    assert "[invalid] corrupted" in caplog.text


def test_append_rejects_inconsistent_or_massless_batches(state: SimulationState, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="accretion.simulation_state"):
        bad_shape = state.append([1.0, 2.0], [(10.0, 20.0)], [(0.0, 0.0), (0.0, 0.0)])
        massless = state.append([0.0], [(10.0, 20.0)], [(0.0, 0.0)])

    assert bad_shape.size == 0 and massless.size == 0
    assert state.n_rows == 0 and state.next_uid == 0
    assert "inconsistent particle batch" in caplog.text
    assert "positive finite" in caplog.text

    uids = state.append([1.0], [(10.0, 20.0)], [(0.5, 0.0)], [3])
    assert list(uids) == [0]
    assert state.colors[0] == 3
    assert state.radii()[0] == pytest.approx(state.cfg.particle_base_radius + state.cfg.particle_radius_gain)
