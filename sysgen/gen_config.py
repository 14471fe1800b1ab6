from __future__ import annotations
from dataclasses import dataclass

"""
This module defines GeneratorConfig, the dataclass holding the knobs of the system generator. The seed feeds the random source when the caller does not pass one, diag_prints toggles the bracketed diagnostic lines emitted while loading and walking, strict_bodies turns on per-body validation (positive mass, finite values) and default_count is the instance count of templates that omit num. The copy method mirrors the simulation config so a base configuration can be cloned and tweaked per run.

"""


@dataclass
class GeneratorConfig:
	seed: int | None = None
	diag_prints: bool = True
	strict_bodies: bool = False
	default_count: int = 1

	def copy(self) -> "GeneratorConfig":
		new = object.__new__(GeneratorConfig)
		new.__dict__ = dict(getattr(self, "__dict__", {}))
		return new
