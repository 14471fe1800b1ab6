"""
This module holds body templates and the store that expands them into concrete bodies.

A BodyTemplate is a named prototype with an instance count and four property slots.
BodyTemplateStore registers templates by unique name, builds them from the `bodies`
section of a configuration tree while checking every generator reference against the
registry, and instantiates a template into `count` Body records. Each slot is resolved
by precedence: the template's own literal or generator wins, then the override context
inherited from the enclosing systems, then zero. Generators are sampled per instance in
the fixed order mass, translation, velocity, rotation so a seeded walk is reproducible.
It assumes the registry is fully populated before templates are built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, List, Union

import numpy as np

from .body import Body
from .exceptions import (
	ConfigurationError,
	DuplicateNameError,
	InvalidCountError,
	UnknownTemplateError,
)
from .generators import GeneratorRegistry
from .slots import (
	EMPTY_CONTEXT,
	SCALAR_KINDS,
	UNSET,
	GeneratorRef,
	Literal,
	PropertySlots,
	Vec2,
)


def check_count(raw, owner: str) -> int:
	if isinstance(raw, bool) or not isinstance(raw, (int, np.integer)):
		raise InvalidCountError(f"{owner}: num must be a positive integer, got {raw!r}")
	if raw <= 0:
		raise InvalidCountError(f"{owner}: num must be a positive integer, got {raw}")
	return int(raw)


def zero_value(kind: str) -> Union[float, Vec2]:
	if kind in SCALAR_KINDS:
		return 0.0
	return (0.0, 0.0)


@dataclass(frozen=True)
class BodyTemplate:
	name: str
	count: int = 1
	slots: PropertySlots = EMPTY_CONTEXT

	@classmethod
	def from_entry(cls, entry: Mapping, default_count: int = 1) -> "BodyTemplate":
		name = entry.get("name")
		if not isinstance(name, str) or not name:
			raise ConfigurationError(f"body template without a name: {dict(entry)!r}")
		raw_count = entry.get("num")
		if raw_count is None:
			count = default_count
		else:
			count = check_count(raw_count, f"body '{name}'")
		return cls(name=name, count=count, slots=PropertySlots.from_entry(entry, f"body '{name}'"))


class BodyTemplateStore:

	def __init__(self, registry: GeneratorRegistry, strict: bool = False) -> None:
		self.registry = registry
		self.strict = strict
		self._templates: Dict[str, BodyTemplate] = {}

	def __contains__(self, name: str) -> bool:
		return name in self._templates

	def __len__(self) -> int:
		return len(self._templates)

	def names(self) -> List[str]:
		return list(self._templates)

	def define(self, template: BodyTemplate) -> BodyTemplate:
		if template.name in self._templates:
			raise DuplicateNameError(f"body template '{template.name}' is defined more than once")
		check_count(template.count, f"body '{template.name}'")
		for kind, gen_name in template.slots.generator_refs():
			self.registry.check(gen_name, kind)
		self._templates[template.name] = template
		return template

	def lookup(self, name: str) -> BodyTemplate:
		template = self._templates.get(name)
		if template is None:
			raise UnknownTemplateError(f"body template '{name}' is not defined")
		return template

	def resolve_slot(self, kind: str, own, context: PropertySlots, rng: np.random.Generator):
		value = own
		if value is UNSET:
			value = getattr(context, kind)
		if isinstance(value, Literal):
			return value.value
		if isinstance(value, GeneratorRef):
			return self.registry.sample(value.name, rng, kind)
		return zero_value(kind)

	def instantiate(
		self,
		template: BodyTemplate,
		context: PropertySlots,
		rng: np.random.Generator,
		system_path: str = "",
		count: int | None = None,
	) -> List[Body]:
		if count is None:
			n = template.count
		else:
			n = check_count(count, f"body '{template.name}'")

		bodies: List[Body] = []
		for i in range(n):
			values = {}
			for kind, own in template.slots.items():
				values[kind] = self.resolve_slot(kind, own, context, rng)
			body = Body(
				mass=float(values["mass"]),
				translation=tuple(values["translation"]),
				velocity=tuple(values["velocity"]),
				rotation=float(values["rotation"]),
				template=template.name,
				system_path=system_path,
				index=i,
			)
			if self.strict:
				body.validate()
			bodies.append(body)
		return bodies

	@classmethod
	def from_entries(
		cls,
		entries: Iterable[Mapping] | None,
		registry: GeneratorRegistry,
		default_count: int = 1,
		strict: bool = False,
	) -> "BodyTemplateStore":
		store = cls(registry, strict=strict)
		for i, entry in enumerate(entries or []):
			if not isinstance(entry, Mapping):
				raise ConfigurationError(f"bodies[{i}]: expected a mapping, got {type(entry).__name__}")
			store.define(BodyTemplate.from_entry(entry, default_count))
		return store
