"""Shared fixtures for the accretion test suite."""

from __future__ import annotations

from typing import Callable

import pytest

from accretion import GameConfig, GameController, SimulationState


@pytest.fixture
def cfg() -> GameConfig:
    """Default config on a 1000x1000 viewport (center at 500, 500) with a fixed seed."""
    return GameConfig(seed=1234)


@pytest.fixture
def state(cfg: GameConfig) -> SimulationState:
    return SimulationState(cfg)


@pytest.fixture
def controller(cfg: GameConfig) -> GameController:
    return GameController(cfg)


@pytest.fixture
def place() -> Callable[..., int]:
    """Append one particle to a state and return its row index."""

    def _place(st: SimulationState, mass: float, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> int:
        st.append([mass], [(x, y)], [(vx, vy)], [7])
        return st.n_rows - 1

    return _place
