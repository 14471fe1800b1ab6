"""
This module is the entry point of the system generator.

SystemGenerator takes a configuration tree that has already been parsed into plain
mappings and lists, builds the generator registry from `gens`, the template store from
`bodies` and the system tree from `systems`, and then produces the flat, ordered list
of Body records by walking the tree with an empty override context. Building happens
once and is fully validated up front (unique names, known references, matching kinds,
valid bounds and counts, no substitution cycles), so a built generator can be asked for
many seeded realisations. generate_named produces a single template or system
definition in isolation. The module-level generate function is the one-shot form. Any
error aborts the whole call; partial output is never returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import List, Set

import numpy as np

from .body import Body
from .exceptions import ConfigurationError
from .gen_config import GeneratorConfig
from .generators import GeneratorRegistry
from .slots import EMPTY_CONTEXT
from .system_tree import ROOT_PATH, SystemReference, SystemTree, TemplateReference
from .templates import BodyTemplateStore
from .utils import diag_print, make_rng


SECTIONS = ("gens", "bodies", "systems")


def _section(tree: Mapping, key: str) -> list:
	raw = tree.get(key)
	if raw is None:
		return []
	if not isinstance(raw, list):
		raise ConfigurationError(f"'{key}' must be a list, got {type(raw).__name__}")
	return raw


class SystemGenerator:

	def __init__(self, tree: Mapping, config: GeneratorConfig | None = None):
		self.config: GeneratorConfig = config or GeneratorConfig()
		if not isinstance(tree, Mapping):
			raise ConfigurationError(f"configuration must be a mapping, got {type(tree).__name__}")
		unknown = sorted(set(tree) - set(SECTIONS))
		if unknown:
			diag_print(self.config.diag_prints, "warning", f"ignoring unknown top-level sections {unknown}")

		self.registry = GeneratorRegistry.from_entries(_section(tree, "gens"))
		self.templates = BodyTemplateStore.from_entries(
			_section(tree, "bodies"),
			self.registry,
			default_count=self.config.default_count,
			strict=self.config.strict_bodies,
		)
		self.tree = SystemTree.build(_section(tree, "systems"), self.templates, self.config.diag_prints)
		self._report_unused()

	def _report_unused(self) -> None:
		if not self.config.diag_prints:
			return
		used_gens: Set[str] = set()
		used_templates: Set[str] = set()
		for name in self.templates.names():
			used_gens.update(g for _, g in self.templates.lookup(name).slots.generator_refs())
		for node in self.tree.nodes():
			used_gens.update(g for _, g in node.overrides.generator_refs())
			if isinstance(node, TemplateReference):
				used_templates.add(node.name)

		for name in self.registry.names():
			if name not in used_gens:
				diag_print(True, "warning", f"generator '{name}' is never referenced")
		for name in self.templates.names():
			if name not in used_templates:
				diag_print(True, "info", f"body template '{name}' is not used by any system")

	def _rng(self, rng) -> np.random.Generator:
		if rng is None:
			return make_rng(self.config.seed)
		return make_rng(rng)

	def generate(self, rng: "np.random.Generator | int | None" = None) -> List[Body]:
		return self.tree.walk(self.tree.root, EMPTY_CONTEXT, self._rng(rng))

	def generate_named(self, name: str, rng: "np.random.Generator | int | None" = None) -> List[Body]:
		if name in self.templates:
			node = TemplateReference(name)
		else:
			self.tree.lookup_definition(name)
			node = SystemReference(name)
		return self.tree.walk(node, EMPTY_CONTEXT, self._rng(rng), f"{ROOT_PATH}/{name}")


def generate(
	tree: Mapping,
	rng: "np.random.Generator | int | None" = None,
	config: GeneratorConfig | None = None,
) -> List[Body]:
	return SystemGenerator(tree, config).generate(rng)
