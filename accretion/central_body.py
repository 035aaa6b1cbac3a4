"""
This module defines the CentralBody class, the gravitational center every particle falls
toward.

The class stores the accumulated mass and the center coordinates, derives the radius as
base_radius + gain * sqrt(mass) so that it never shrinks while mass grows, and clamps
every mass change into [0, max_mass]. Mass only changes through absorb (particles
reaching the center) and spend (upgrade purchases); both return the amount actually
applied so callers can account for clamping.
"""

from __future__ import annotations
import math
from typing import Tuple


class CentralBody:
	__slots__ = ("mass", "x", "y", "base_radius", "radius_gain", "max_mass")

	def __init__(
		self,
		mass: float = 0.0,
		x: float = 0.0,
		y: float = 0.0,
		*,
		base_radius: float = 12.0,
		radius_gain: float = 0.35,
		max_mass: float = 1.0e6,
	) -> None:
		self.max_mass = float(max_mass)
		self.mass = min(max(float(mass), 0.0), self.max_mass)
		self.x = float(x)
		self.y = float(y)
		self.base_radius = float(base_radius)
		self.radius_gain = float(radius_gain)

	@property
	def radius(self) -> float:
		return self.base_radius + self.radius_gain * math.sqrt(self.mass)

	@property
	def center(self) -> Tuple[float, float]:
		return (self.x, self.y)

	def move_to(self, x: float, y: float) -> None:
		self.x = float(x)
		self.y = float(y)

	def absorb(self, amount: float) -> float:
		before = self.mass
		self.mass = min(self.mass + max(float(amount), 0.0), self.max_mass)
		return self.mass - before

	def spend(self, amount: float) -> float:
		amount = max(float(amount), 0.0)
		if amount > self.mass:
			return 0.0
		self.mass -= amount
		return amount

	def copy(self) -> "CentralBody":
		return CentralBody(
			self.mass,
			self.x,
			self.y,
			base_radius=self.base_radius,
			radius_gain=self.radius_gain,
			max_mass=self.max_mass,
		)

	def __repr__(self) -> str:
		return (f"CentralBody(mass={self.mass}, x={self.x}, y={self.y}, "
				f"radius={self.radius})")
