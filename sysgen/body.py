"""
This module defines Body, the fully resolved record produced by the system generator.

A Body stores mass, translation (x, y), velocity (dx, dy) and rotation as plain floats
together with its provenance: the template it was instantiated from, the slash-joined
path of the system node that instantiated it and its index within that instantiation.
Bodies are frozen so the generated list can be handed to a simulation or a writer
without defensive copies. The x/y/vx/vy accessors keep the attribute names used by the
simulation layer. The class makes no assumptions about units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .exceptions import InvalidBodyError


@dataclass(frozen=True)
class Body:
	mass: float
	translation: Tuple[float, float]
	velocity: Tuple[float, float]
	rotation: float
	template: str
	system_path: str
	index: int = 0

	@property
	def x(self) -> float:
		return self.translation[0]

	@property
	def y(self) -> float:
		return self.translation[1]

	@property
	def vx(self) -> float:
		return self.velocity[0]

	@property
	def vy(self) -> float:
		return self.velocity[1]

	def validate(self) -> None:
		values = (self.mass, *self.translation, *self.velocity, self.rotation)
		for v in values:
			if not math.isfinite(v):
				raise InvalidBodyError(f"{self.label()}: non-finite value in {values}")
		if not self.mass > 0.0:
			raise InvalidBodyError(f"{self.label()}: mass must be greater than 0, got {self.mass}")

	def label(self) -> str:
		return f"{self.system_path}:{self.template}[{self.index}]"

	def __str__(self) -> str:
		return (f"M({self.mass}) P({self.x}, {self.y}) V({self.vx}, {self.vy}) "
				f"R({self.rotation})")
