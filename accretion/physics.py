import math
import numpy as np
from typing import Tuple

from .constants import ZERO_SPEED

"""
This module provides the size, force and merge rules of the game. particle_radius maps a particle mass onto its collision and drawing radius, base + gain * sqrt(mass). mass_amplification grows a particle's pull with its mass along a log curve, acceleration_magnitude combines it with the gravity constant and the gravity level, damping gives the per-frame drag factor clamped to [drag_floor, base_drag] so it can neither anti-damp nor freeze heavy particles, and circular_speed is the speed a particle would need to hold a circle under a constant-magnitude pull. merge_velocity combines two velocities into the mass-weighted mean and, when asked, lifts the result to a floor fraction of the faster input speed, falling back to a usable direction when the weighted mean cancels out.


"""

def particle_radius(mass, base_radius: float, gain: float):
	return base_radius + gain * np.sqrt(mass)


def mass_amplification(mass, gain: float):
	return 1.0 + gain * np.log1p(mass)


def acceleration_magnitude(mass, gravity_constant: float, level: float, gain: float):
	return gravity_constant * level * mass_amplification(mass, gain)


def damping(mass, base_drag: float, drag_per_mass: float, drag_floor: float):
	return np.clip(base_drag - drag_per_mass * np.asarray(mass, dtype=float), drag_floor, base_drag)


def circular_speed(accel, radius):
	return np.sqrt(np.maximum(accel * radius, 0.0))


def merge_velocity(
	m1: float, v1: np.ndarray,
	m2: float, v2: np.ndarray,
	*,
	keep_speed: bool = True,
	speed_floor: float = 0.85,
) -> Tuple[np.ndarray, bool]:
	v1 = np.asarray(v1, dtype=float)
	v2 = np.asarray(v2, dtype=float)
	total = float(m1) + float(m2)
	v = (float(m1) * v1 + float(m2) * v2) / total

	if not keep_speed:
		return v, False

	s1 = float(math.hypot(v1[0], v1[1]))
	s2 = float(math.hypot(v2[0], v2[1]))
	target = float(speed_floor) * max(s1, s2)
	speed = float(math.hypot(v[0], v[1]))
	if speed >= target or target <= ZERO_SPEED:
		return v, False

	if speed > ZERO_SPEED:
		direction = v / speed
	else:
		# momenta cancelled; keep heading of the faster input
		if s1 >= s2:
			direction = v1 / s1
		else:
			direction = v2 / s2
	return direction * target, True
