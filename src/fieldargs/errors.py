# src/fieldargs/errors.py

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
	"""
	Base class for every error raised while resolving a configuration target.

	:param message: Human-readable description.
	:param field: Name of the field the error refers to (if any).
	"""

	def __init__(self, message: str, *, field: Optional[str] = None) -> None:
		super().__init__(message)
		self.field = field

	def with_prefix(self, prefix: str) -> "ConfigError":
		"""
		Return a copy of this error whose message is prefixed with *prefix*.

		Used by the pipeline to add the failing stage ("parse failed: ...")
		while keeping the error class, so callers can still catch by type.

		:param prefix: Stage description.
		:return: New error instance of the same class.
		"""
		clone = self.__class__.__new__(self.__class__)
		clone.__dict__.update(self.__dict__)
		clone.args = (f"{prefix}: {self}",)
		return clone


class TargetError(ConfigError):
	"""The configuration target is not a dataclass instance."""


class ParseFieldError(ConfigError):
	"""Source text (default, environment, argument) cannot be converted to the field type."""


class UnsupportedTypeError(ConfigError):
	"""The field's annotation is outside the supported set of semantic types."""


class ArgumentsError(ConfigError):
	"""
	The argument vector itself is malformed (e.g. an unknown flag).

	:param usage: Usage text of the generated parser.
	"""

	def __init__(self, message: str, *, usage: str = "") -> None:
		super().__init__(message)
		self.usage = usage


class FillError(ConfigError):
	"""A resolved value cannot be placed onto the target."""


class RequiredFieldError(ConfigError):
	"""A required field is still empty after all sources were applied."""


class FieldValidationError(ConfigError):
	"""A custom ``validate(ctx)`` hook rejected the target or one of its fields."""


__all__ = [
	"ConfigError",
	"TargetError",
	"ParseFieldError",
	"UnsupportedTypeError",
	"ArgumentsError",
	"FillError",
	"RequiredFieldError",
	"FieldValidationError",
]
