from __future__ import annotations

import json

from accretion.cli import buy_cheapest, sim_main
from accretion import GameController, UpgradeTrackId


def test_headless_run_prints_json_summary(capsys) -> None:
    code = sim_main(["--frames", "240", "--seed", "3", "--buy-every", "60", "--json", "--log-level", "WARNING"])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["tick"] == 240.0
    assert summary["particles"] <= 400.0
    assert summary["level_click_yield"] >= 1.0


def test_buy_cheapest_picks_lowest_price(controller: GameController) -> None:
    controller.state.body.absorb(12.0)

    assert buy_cheapest(controller)
    assert controller.state.economy.level(UpgradeTrackId.CLICK_YIELD) == 2
    assert not buy_cheapest(controller)
