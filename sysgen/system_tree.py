"""
This module builds the hierarchy of system nodes and walks it into bodies.

Entries of the `systems` section become one of three node types. A node whose name is a
registered body template is a TemplateReference and instantiates that template. A named
node that is not a template but has children of its own is a system definition: it is
walked in place like any group and can also be reused by name elsewhere. A named node
with neither a template nor children is a SystemReference that splices in the subtree
of the definition it names. Unnamed nodes are plain InlineOverrideGroup scopes.

The walk is a depth-first pre-order traversal in declared order. Every node overlays
its own overrides on the context inherited from its parent and hands the resulting
immutable context to its children, so no state is shared between sibling subtrees.
A spliced definition receives the inherited context, then the definition's overrides,
then the referencing node's overrides. Self-referencing definitions are rejected with
CycleError, both when the tree is built and, as a guard, during the walk.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

import numpy as np

from .body import Body
from .exceptions import (
	ConfigurationError,
	CycleError,
	DuplicateNameError,
	UnknownTemplateError,
)
from .slots import EMPTY_CONTEXT, SLOT_KEYS, PropertySlots
from .templates import BodyTemplateStore, check_count
from .utils import diag_print, make_rng


ROOT_PATH = "systems"
NODE_KEYS = {"name", "num", "systems", *SLOT_KEYS}


@dataclass(frozen=True)
class TemplateReference:
	name: str
	overrides: PropertySlots = EMPTY_CONTEXT
	count: Optional[int] = None
	children: Tuple["SystemNode", ...] = ()


@dataclass(frozen=True)
class SystemReference:
	name: str
	overrides: PropertySlots = EMPTY_CONTEXT
	count: Optional[int] = None


@dataclass(frozen=True)
class InlineOverrideGroup:
	name: Optional[str] = None
	overrides: PropertySlots = EMPTY_CONTEXT
	count: Optional[int] = None
	children: Tuple["SystemNode", ...] = ()


SystemNode = Union[TemplateReference, SystemReference, InlineOverrideGroup]


def _segment(node: SystemNode, index: int) -> str:
	if node.name:
		return node.name
	return f"#{index}"


def _references(node: SystemNode) -> Iterable[str]:
	if isinstance(node, SystemReference):
		yield node.name
		return
	for child in node.children:
		yield from _references(child)


class SystemTree:

	def __init__(
		self,
		root: InlineOverrideGroup,
		definitions: Dict[str, InlineOverrideGroup],
		templates: BodyTemplateStore,
		diag_prints: bool = True,
	) -> None:
		self.root = root
		self._definitions = definitions
		self.templates = templates
		self.diag_prints = diag_prints

	def definitions(self) -> Dict[str, InlineOverrideGroup]:
		return dict(self._definitions)

	def nodes(self) -> Iterable[SystemNode]:
		stack: List[SystemNode] = list(reversed(self.root.children))
		while stack:
			node = stack.pop()
			yield node
			if not isinstance(node, SystemReference):
				stack.extend(reversed(node.children))

	def lookup_definition(self, name: str) -> InlineOverrideGroup:
		definition = self._definitions.get(name)
		if definition is None:
			raise UnknownTemplateError(f"'{name}' is neither a body template nor a system definition")
		return definition

	@classmethod
	def build(
		cls,
		entries: Sequence[Mapping] | None,
		templates: BodyTemplateStore,
		diag_prints: bool = True,
	) -> "SystemTree":
		definitions: Dict[str, InlineOverrideGroup] = {}

		def build_node(entry, where: str) -> SystemNode:
			if not isinstance(entry, Mapping):
				raise ConfigurationError(f"{where}: expected a mapping, got {type(entry).__name__}")
			unknown = sorted(set(entry) - NODE_KEYS)
			if unknown:
				diag_print(diag_prints, "warning", f"{where}: ignoring unknown keys {unknown}")

			name = entry.get("name")
			if name is not None and (not isinstance(name, str) or not name):
				raise ConfigurationError(f"{where}: name must be a non-empty string, got {name!r}")
			owner = f"system '{name}'" if name else where
			overrides = PropertySlots.from_entry(entry, owner)
			for kind, gen_name in overrides.generator_refs():
				templates.registry.check(gen_name, kind)

			raw_count = entry.get("num")
			count = None if raw_count is None else check_count(raw_count, owner)

			raw_children = entry.get("systems") or []
			if not isinstance(raw_children, Sequence) or isinstance(raw_children, str):
				raise ConfigurationError(f"{owner}: 'systems' must be a list")
			children = tuple(
				build_node(child, f"{where}/{_segment_of(child, i)}")
				for i, child in enumerate(raw_children)
			)

			if name is not None and name in templates:
				return TemplateReference(name, overrides, count, children)
			if name is not None and children:
				if name in definitions:
					raise DuplicateNameError(f"system '{name}' is defined more than once")
				group = InlineOverrideGroup(name, overrides, count, children)
				definitions[name] = group
				return group
			if name is not None:
				return SystemReference(name, overrides, count)
			if not children:
				diag_print(diag_prints, "warning", f"{where}: empty system node produces no bodies")
			return InlineOverrideGroup(None, overrides, count, children)

		if entries is None:
			entries = []
		if not isinstance(entries, Sequence) or isinstance(entries, str):
			raise ConfigurationError("'systems' must be a list of system nodes")
		root = InlineOverrideGroup(
			children=tuple(build_node(e, f"{ROOT_PATH}/{_segment_of(e, i)}") for i, e in enumerate(entries)),
		)
		tree = cls(root, definitions, templates, diag_prints)
		tree.check_references()
		return tree

	def check_references(self) -> None:
		"""Fail early on dangling references and self-substituting definitions."""
		for name in _references(self.root):
			self.lookup_definition(name)

		graph = {name: set(_references(d)) for name, d in self._definitions.items()}
		done: Set[str] = set()

		def visit(name: str, trail: Tuple[str, ...]) -> None:
			if name in trail:
				cycle = trail[trail.index(name):] + (name,)
				raise CycleError("system substitution cycle: " + " -> ".join(cycle))
			if name in done:
				return
			for ref in sorted(graph.get(name, ())):
				self.lookup_definition(ref)
				visit(ref, trail + (name,))
			done.add(name)

		for name in graph:
			visit(name, ())

	def walk(
		self,
		root: SystemNode | None = None,
		initial_context: PropertySlots = EMPTY_CONTEXT,
		rng: np.random.Generator | None = None,
		path: str = ROOT_PATH,
	) -> List[Body]:
		rng = make_rng(rng)
		if root is None:
			root = self.root
		out: List[Body] = []
		self._visit(root, initial_context, rng, path, (), out)
		return out

	def _visit_children(self, children, context, rng, path, expanding, out) -> None:
		for i, child in enumerate(children):
			self._visit(child, context, rng, f"{path}/{_segment(child, i)}", expanding, out)

	def _visit(
		self,
		node: SystemNode,
		context: PropertySlots,
		rng: np.random.Generator,
		path: str,
		expanding: Tuple[str, ...],
		out: List[Body],
	) -> None:
		if isinstance(node, SystemReference):
			if node.name in expanding:
				raise CycleError("system substitution cycle: " + " -> ".join(expanding + (node.name,)))
			definition = self.lookup_definition(node.name)
			ctx = context.overlay(definition.overrides).overlay(node.overrides)
			repeats = node.count or definition.count or 1
			inner = expanding + (node.name,)
			for k in range(repeats):
				self._visit_children(definition.children, ctx, rng, _repeat_path(path, k, repeats), inner, out)
			return

		ctx = context.overlay(node.overrides)

		if isinstance(node, TemplateReference):
			template = self.templates.lookup(node.name)
			out.extend(self.templates.instantiate(template, ctx, rng, path, node.count))
			self._visit_children(node.children, ctx, rng, path, expanding, out)
			return

		inner = expanding
		if node.name:
			if node.name in expanding:
				raise CycleError("system substitution cycle: " + " -> ".join(expanding + (node.name,)))
			inner = expanding + (node.name,)
		repeats = node.count or 1
		for k in range(repeats):
			self._visit_children(node.children, ctx, rng, _repeat_path(path, k, repeats), inner, out)


def _segment_of(entry, index: int) -> str:
	if isinstance(entry, Mapping) and entry.get("name"):
		return str(entry["name"])
	return f"#{index}"


def _repeat_path(path: str, k: int, repeats: int) -> str:
	if repeats == 1:
		return path
	return f"{path}[{k}]"
