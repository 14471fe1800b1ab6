"""
Small helpers shared by the generator modules: random source normalisation and
the bracketed diagnostic printer.
"""

from __future__ import annotations

import numpy as np


def make_rng(seed_or_rng: "np.random.Generator | int | None" = None) -> np.random.Generator:
	if isinstance(seed_or_rng, np.random.Generator):
		return seed_or_rng
	return np.random.default_rng(seed_or_rng)


def diag_print(enabled: bool, level: str, msg: str) -> None:
	if enabled:
		print(f"[{level}] {msg}")
