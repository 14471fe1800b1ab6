"""
Exception hierarchy for the system generator.

Every failure raised while loading a configuration tree or walking its systems
derives from SystemGenError, so callers can catch the whole family at once or
narrow down to one class. The generator surfaces the first error it meets and
never returns partial output.
"""


class SystemGenError(Exception):
	"""Root of all system generator exceptions."""


class ConfigurationError(SystemGenError):
	"""Malformed configuration entry (missing field, bad literal, unknown type)."""


class DuplicateNameError(SystemGenError):
	"""A generator, template or system definition name is reused."""


class UnknownGeneratorError(SystemGenError):
	"""A slot references a generator that was never defined."""


class UnknownTemplateError(SystemGenError):
	"""A system node references a name that is neither a template nor a system."""


class KindMismatchError(SystemGenError):
	"""A generator of one kind is used to fill a slot of another kind."""


class InvalidBoundsError(SystemGenError):
	"""A generator dimension has min > max."""


class InvalidCountError(SystemGenError):
	"""An instance or repeat count is not a positive integer."""


class CycleError(SystemGenError):
	"""A system substitutes itself, directly or through other systems."""


class InvalidBodyError(SystemGenError):
	"""A generated body fails strict validation."""
