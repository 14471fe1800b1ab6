"""
This module defines the property slots shared by body templates and system nodes.

Each of the four physical properties (mass, translation, velocity, rotation) is held in
a three-way variant: a Literal carrying a concrete value, a GeneratorRef naming a
generator that is sampled when a body is instantiated, or UNSET meaning the value is
inherited from the enclosing systems. PropertySlots groups the four slots and its
overlay method implements the per-slot merge used while walking the system tree, so
the same class doubles as the immutable override context. Literal pairs may arrive as
{x, y}, {dx, dy} or two-element sequences and are always decoded to a (float, float)
tuple. The module assumes the raw configuration has already been parsed into plain
mappings, sequences, strings and numbers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from numbers import Real
from typing import Iterator, Tuple, Union

from .exceptions import ConfigurationError


MASS = "mass"
TRANSLATION = "translation"
VELOCITY = "velocity"
ROTATION = "rotation"

KINDS = (MASS, TRANSLATION, VELOCITY, ROTATION)
SCALAR_KINDS = (MASS, ROTATION)

# configuration key -> property kind
SLOT_KEYS = {"m": MASS, "t": TRANSLATION, "v": VELOCITY, "r": ROTATION}

PAIR_FIELDS = {
	TRANSLATION: ("x", "y"),
	VELOCITY: ("dx", "dy"),
}

Vec2 = Tuple[float, float]


@dataclass(frozen=True)
class Literal:
	value: Union[float, Vec2]


@dataclass(frozen=True)
class GeneratorRef:
	name: str


class _Unset:
	__slots__ = ()

	def __repr__(self) -> str:
		return "UNSET"

	def __reduce__(self):
		return "UNSET"


UNSET = _Unset()

SlotValue = Union[Literal, GeneratorRef, _Unset]


def to_float(raw, owner: str, key: str) -> float:
	if isinstance(raw, bool) or not isinstance(raw, Real):
		raise ConfigurationError(f"{owner}: '{key}' expects a number, got {raw!r}")
	return float(raw)


def decode_pair(raw, kind: str, owner: str) -> Vec2:
	"""Decode a translation/velocity literal into a canonical (float, float)."""
	if isinstance(raw, Mapping):
		preferred = PAIR_FIELDS[kind]
		for a, b in (preferred, ("x", "y"), ("dx", "dy")):
			if a in raw and b in raw:
				return (to_float(raw[a], owner, a), to_float(raw[b], owner, b))
		raise ConfigurationError(
			f"{owner}: {kind} literal needs fields {preferred[0]}/{preferred[1]}, got {sorted(raw)}"
		)
	if isinstance(raw, Sequence) and not isinstance(raw, str):
		if len(raw) != 2:
			raise ConfigurationError(f"{owner}: {kind} literal needs 2 components, got {len(raw)}")
		return (to_float(raw[0], owner, kind), to_float(raw[1], owner, kind))
	raise ConfigurationError(f"{owner}: cannot read {kind} literal from {raw!r}")


def decode_slot(raw, kind: str, owner: str) -> SlotValue:
	if raw is None:
		return UNSET
	if isinstance(raw, str):
		return GeneratorRef(raw)
	if kind in SCALAR_KINDS:
		return Literal(to_float(raw, owner, kind))
	return Literal(decode_pair(raw, kind, owner))


@dataclass(frozen=True)
class PropertySlots:
	mass: SlotValue = UNSET
	translation: SlotValue = UNSET
	velocity: SlotValue = UNSET
	rotation: SlotValue = UNSET

	@classmethod
	def from_entry(cls, entry: Mapping, owner: str) -> "PropertySlots":
		values = {}
		for key, kind in SLOT_KEYS.items():
			values[kind] = decode_slot(entry.get(key), kind, owner)
		return cls(**values)

	def overlay(self, other: "PropertySlots") -> "PropertySlots":
		"""Return a new slot set where every set slot of `other` replaces ours."""
		values = {}
		for f in fields(self):
			mine = getattr(self, f.name)
			theirs = getattr(other, f.name)
			if theirs is UNSET:
				values[f.name] = mine
			else:
				values[f.name] = theirs
		return PropertySlots(**values)

	def items(self) -> Iterator[Tuple[str, SlotValue]]:
		for kind in KINDS:
			yield kind, getattr(self, kind)

	def generator_refs(self) -> Iterator[Tuple[str, str]]:
		for kind, value in self.items():
			if isinstance(value, GeneratorRef):
				yield kind, value.name

	def is_empty(self) -> bool:
		for _, value in self.items():
			if value is not UNSET:
				return False
		return True


OverrideContext = PropertySlots
EMPTY_CONTEXT = PropertySlots()
