"""
Console entry points.

accretion-sim runs the game headless for a fixed number of frames with auto-play on,
optionally buying the cheapest affordable upgrade at a fixed interval, and prints the
final diagnostics. accretion-play opens the pygame viewer.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .controller import GameController
from .diagnostics import Diagnostics
from .economy import UpgradeTrackId
from .frame_driver import FrameDriver
from .logging_config import setup_logging
from .sim_config import GameConfig

logger = logging.getLogger(__name__)


def _common_args(parser: argparse.ArgumentParser) -> None:
	parser.add_argument("--seed", type=int, default=None, help="random seed")
	parser.add_argument("--width", type=float, default=1000.0)
	parser.add_argument("--height", type=float, default=1000.0)
	parser.add_argument("--max-particles", type=int, default=None)
	parser.add_argument("--spawn-policy", choices=["cap", "reject"], default=None)
	parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
	parser.add_argument("--log-file", type=Path, default=None)


def build_config(args: argparse.Namespace) -> GameConfig:
	cfg = GameConfig(viewport_width=args.width, viewport_height=args.height, seed=args.seed)
	if args.max_particles is not None:
		cfg.max_particles = int(args.max_particles)
	if args.spawn_policy is not None:
		cfg.spawn_policy = args.spawn_policy
	return cfg


def buy_cheapest(ctl: GameController) -> bool:
	snap = ctl.snapshot()
	options = [t for t in snap.tracks if t.affordable]
	if not options:
		return False
	best = min(options, key=lambda t: t.next_cost)
	result = ctl.purchase(UpgradeTrackId(best.track))
	return bool(result is not None and result.accepted)


def sim_main(argv: Optional[List[str]] = None) -> int:
	parser = argparse.ArgumentParser(prog="accretion-sim", description="Run the accretion core headless.")
	_common_args(parser)
	parser.add_argument("--frames", type=int, default=3600)
	parser.add_argument("--dt", type=float, default=None, help="seconds per frame (default: config frame_dt)")
	parser.add_argument("--buy-every", type=int, default=0, help="try to buy the cheapest upgrade every N frames (0 = never)")
	parser.add_argument("--json", action="store_true", help="print the summary as JSON")
	args = parser.parse_args(argv)

	setup_logging("accretion", level=args.log_level, log_file=args.log_file)

	ctl = GameController(build_config(args), seed=args.seed)
	ctl.toggle_auto_play()
	driver = FrameDriver(ctl)

	bought = 0
	for frame in range(int(args.frames)):
		driver.run_fixed(1, args.dt)
		if args.buy_every > 0 and (frame + 1) % args.buy_every == 0:
			while buy_cheapest(ctl):
				bought += 1
		ctl.drain_events()

	summary = Diagnostics(ctl.state).summary()
	summary["upgrades_bought"] = float(bought)
	for tid, track in ctl.state.economy.tracks.items():
		summary[f"level_{tid.value}"] = float(track.level)

	if args.json:
		print(json.dumps(summary, indent=2, sort_keys=True))
	else:
		for key in sorted(summary):
			print(f"{key:>24}: {summary[key]:.4f}")
	return 0


def play_main(argv: Optional[List[str]] = None) -> int:
	parser = argparse.ArgumentParser(prog="accretion-play", description="Play accretion in a pygame window.")
	_common_args(parser)
	parser.add_argument("--fps", type=int, default=60)
	parser.add_argument("--autoplay", action="store_true")
	args = parser.parse_args(argv)

	setup_logging("accretion", level=args.log_level, log_file=args.log_file)

	from .viewer import run_viewer

	ctl = GameController(build_config(args), seed=args.seed)
	if args.autoplay:
		ctl.toggle_auto_play()
	return run_viewer(ctl, fps=args.fps)


if __name__ == "__main__":
	raise SystemExit(sim_main())
