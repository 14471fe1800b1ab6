"""
This module implements the named value generators and their registry.

A Generator is an immutable uniform sampler for one physical property: mass and
rotation are scalar ranges, translation has independent x/y ranges and velocity has
independent dx/dy ranges. GeneratorRegistry collects generators by unique name, builds
them from the `gens` section of a configuration tree (where scalar kinds carry min/max
directly and pair kinds carry one {min, max} mapping per axis), validates references
ahead of sampling and draws values from an explicitly passed numpy Generator. Sampling
is uniform and independent per dimension, and no global random state is touched, so
the same seed and the same call order reproduce identical values. It assumes bounds
are finite numbers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

import numpy as np

from .exceptions import (
	ConfigurationError,
	DuplicateNameError,
	InvalidBoundsError,
	KindMismatchError,
	UnknownGeneratorError,
)
from .slots import KINDS, PAIR_FIELDS, SCALAR_KINDS, Vec2, to_float


Range = Tuple[float, float]


@dataclass(frozen=True)
class Generator:
	name: str
	kind: str
	bounds: Tuple[Range, ...]

	def sample(self, rng: np.random.Generator) -> Union[float, Vec2]:
		values = [float(rng.uniform(lo, hi)) for lo, hi in self.bounds]
		if self.kind in SCALAR_KINDS:
			return values[0]
		return (values[0], values[1])


def _check_range(name: str, axis: str, lo: float, hi: float) -> Range:
	lo = to_float(lo, name, f"{axis}.min")
	hi = to_float(hi, name, f"{axis}.max")
	if not (np.isfinite(lo) and np.isfinite(hi)):
		raise ConfigurationError(f"generator '{name}': {axis} bounds must be finite, got ({lo}, {hi})")
	if lo > hi:
		raise InvalidBoundsError(f"generator '{name}': {axis} min {lo} > max {hi}")
	return (lo, hi)


def _as_pair(raw, name: str, axis: str) -> tuple:
	if isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
		return tuple(raw)
	raise ConfigurationError(f"generator '{name}': {axis} expects a pair, got {raw!r}")


def _read_range(raw, name: str, axis: str) -> Range:
	if isinstance(raw, Mapping):
		if "min" not in raw or "max" not in raw:
			raise ConfigurationError(f"generator '{name}': {axis} needs 'min' and 'max'")
		return (to_float(raw["min"], name, f"{axis}.min"), to_float(raw["max"], name, f"{axis}.max"))
	if isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
		return (to_float(raw[0], name, f"{axis}.min"), to_float(raw[1], name, f"{axis}.max"))
	raise ConfigurationError(f"generator '{name}': cannot read {axis} range from {raw!r}")


class GeneratorRegistry:

	def __init__(self) -> None:
		self._gens: Dict[str, Generator] = {}

	def __contains__(self, name: str) -> bool:
		return name in self._gens

	def __len__(self) -> int:
		return len(self._gens)

	def names(self) -> List[str]:
		return list(self._gens)

	def define(self, name: str, kind: str, bounds) -> Generator:
		"""Register a generator.

		`bounds` is (min, max) for mass/rotation and ((min, max), (min, max)) for
		translation/velocity.
		"""
		if kind not in KINDS:
			raise ConfigurationError(f"generator '{name}': unknown type '{kind}', expected one of {KINDS}")
		if name in self._gens:
			raise DuplicateNameError(f"generator '{name}' is defined more than once")

		if kind in SCALAR_KINDS:
			lo, hi = _as_pair(bounds, name, kind)
			ranges = (_check_range(name, kind, lo, hi),)
		else:
			axes = PAIR_FIELDS[kind]
			pair = _as_pair(bounds, name, kind)
			ranges = tuple(
				_check_range(name, axis, *_as_pair(r, name, axis)) for axis, r in zip(axes, pair)
			)

		gen = Generator(name=name, kind=kind, bounds=ranges)
		self._gens[name] = gen
		return gen

	def get(self, name: str) -> Generator:
		gen = self._gens.get(name)
		if gen is None:
			raise UnknownGeneratorError(f"generator '{name}' is not defined")
		return gen

	def check(self, name: str, kind: str) -> Generator:
		gen = self.get(name)
		if gen.kind != kind:
			raise KindMismatchError(
				f"generator '{name}' produces {gen.kind} values and cannot fill a {kind} slot"
			)
		return gen

	def sample(self, name: str, rng: np.random.Generator, kind: str | None = None) -> Union[float, Vec2]:
		if kind is None:
			gen = self.get(name)
		else:
			gen = self.check(name, kind)
		return gen.sample(rng)

	@classmethod
	def from_entries(cls, entries: Iterable[Mapping] | None) -> "GeneratorRegistry":
		reg = cls()
		for i, entry in enumerate(entries or []):
			if not isinstance(entry, Mapping):
				raise ConfigurationError(f"gens[{i}]: expected a mapping, got {type(entry).__name__}")
			name = entry.get("name")
			if not isinstance(name, str) or not name:
				raise ConfigurationError(f"gens[{i}]: missing generator name")
			kind = entry.get("type")
			if kind not in KINDS:
				raise ConfigurationError(f"generator '{name}': unknown type {kind!r}, expected one of {KINDS}")

			if kind in SCALAR_KINDS:
				bounds = _read_range(entry, name, kind)
			else:
				bounds = []
				for axis in PAIR_FIELDS[kind]:
					if axis not in entry:
						raise ConfigurationError(f"generator '{name}': {kind} needs a '{axis}' range")
					bounds.append(_read_range(entry[axis], name, axis))
			reg.define(name, kind, bounds)
		return reg
