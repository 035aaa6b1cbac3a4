"""
Minimal pygame front end.

Draws the FrameSnapshot (central body, particles, upgrade rows, cooldown bar) and
translates input into controller commands: SPACE or a left click spawns, 1/2/3 buy the
click-yield, particle-mass and spawn-speed upgrades, A toggles auto-play, and resizing
the window recenters the simulation. A denied purchase flashes its row red for a
moment. The window refresh is the display callback that pumps the FrameDriver.
"""

from __future__ import annotations

import colorsys
import logging
import time

import pygame

from .controller import GameController
from .economy import UpgradeTrackId
from .frame_driver import FrameDriver, QueuedSurface
from .snapshot import FrameSnapshot

logger = logging.getLogger(__name__)

BACKGROUND = (8, 8, 18)
CENTER_COLOR = (250, 220, 140)
TEXT_COLOR = (220, 220, 230)
DENIED_COLOR = (255, 90, 90)
BAR_COLOR = (100, 200, 200)
DENIAL_FLASH = 0.4

KEY_TRACKS = {
	pygame.K_1: UpgradeTrackId.CLICK_YIELD,
	pygame.K_2: UpgradeTrackId.PARTICLE_MASS,
	pygame.K_3: UpgradeTrackId.SPAWN_SPEED,
}


def particle_color(seed: int) -> tuple:
	hue = (seed % 360) / 360.0
	r, g, b = colorsys.hsv_to_rgb(hue, 0.45, 1.0)
	return int(r * 255), int(g * 255), int(b * 255)


def draw(screen: pygame.Surface, font: pygame.font.Font, snap: FrameSnapshot, denied: dict, now: float) -> None:
	screen.fill(BACKGROUND)

	cx, cy = snap.center
	pygame.draw.circle(screen, CENTER_COLOR, (int(cx), int(cy)), max(int(snap.radius), 1))
	for p in snap.particles:
		pygame.draw.circle(screen, particle_color(p.color_seed), (int(p.x), int(p.y)), max(int(p.radius), 1))

	lines = [
		(f"mass {snap.mass:,.0f}   gravity x{snap.gravity_level:.2f}   "
		 f"particles {snap.particle_count}/{snap.particle_ceiling}   "
		 f"auto {'on' if snap.auto_play else 'off'}", TEXT_COLOR),
	]
	for key, t in enumerate(snap.tracks, start=1):
		price = "MAX" if t.maxed else f"{t.next_cost:,}"
		color = DENIED_COLOR if now - denied.get(t.track, -1.0e9) < DENIAL_FLASH else TEXT_COLOR
		lines.append((f"[{key}] {t.label}: lv {t.level}/{t.cap}  cost {price}", color))

	y = 10
	for text, color in lines:
		screen.blit(font.render(text, True, color), (10, y))
		y += 22

	width = screen.get_width() - 20
	pygame.draw.rect(screen, (40, 40, 60), (10, y + 4, width, 6))
	pygame.draw.rect(screen, BAR_COLOR, (10, y + 4, int(width * snap.cooldown_fraction), 6))


def run_viewer(ctl: GameController, *, fps: int = 60) -> int:
	pygame.init()
	w, h = ctl.state.viewport
	screen = pygame.display.set_mode((int(w), int(h)), pygame.RESIZABLE)
	pygame.display.set_caption("accretion")
	font = pygame.font.SysFont("Arial", 18)
	clock = pygame.time.Clock()

	surface = QueuedSurface()
	driver = FrameDriver(ctl, surface, max_dt=0.25)
	driver.start()
	denied: dict = {}

	running = True
	while running:
		for event in pygame.event.get():
			if event.type == pygame.QUIT:
				running = False
			elif event.type == pygame.VIDEORESIZE:
				ctl.on_viewport_resize(event.w, event.h)
			elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
				ctl.request_spawn()
			elif event.type == pygame.KEYDOWN:
				if event.key == pygame.K_ESCAPE:
					running = False
				elif event.key == pygame.K_SPACE:
					ctl.request_spawn()
				elif event.key == pygame.K_a:
					ctl.toggle_auto_play()
				elif event.key in KEY_TRACKS:
					ctl.purchase(KEY_TRACKS[event.key])

		now = time.monotonic()
		surface.pump(now)

		for ev in ctl.drain_events():
			if ev.type == "PURCHASE_DENIED":
				denied[ev.payload["track"]] = now

		draw(screen, font, ctl.snapshot(), denied, now)
		pygame.display.flip()
		clock.tick(fps)

	driver.stop()
	pygame.quit()
	return 0
