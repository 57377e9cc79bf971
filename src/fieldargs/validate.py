# src/fieldargs/validate.py
"""
Validation of a filled configuration target.

Two passes, each stopping at the first failure:

- :func:`validate_required` - required fields must not be empty;
- :func:`validate_has_validation` - ``validate(ctx)`` hooks on the target and
  on field values (list elements included).
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Iterable

from .errors import FieldValidationError, RequiredFieldError, UnsupportedTypeError
from .fields import FieldDescriptor, describe_fields
from .kinds import Kind, SemanticType, has_hook, is_list_value

LOG = logging.getLogger(__name__)


# ------------------------------- Presence -----------------------------------
def is_empty(semantic: SemanticType, value: Any) -> bool:
	"""
	Whether *value* counts as "not provided" for a required field.

	Booleans are never empty. ``None`` always is. Lists are empty without
	elements; optional fields only when ``None``; other fields when equal to
	their zero value (``""``, ``0``, ``0.0``, zero duration).
	"""
	kind = semantic.kind
	if kind is Kind.BOOL:
		return False
	if value is None:
		return True
	if kind is Kind.LIST or (kind is Kind.CUSTOM and is_list_value(value)):
		return len(value) == 0
	if semantic.optional:
		return False
	if kind in (Kind.TEXT, Kind.INT, Kind.FLOAT):
		return not value
	if kind is Kind.DURATION:
		return value == timedelta(0)
	if kind is Kind.CUSTOM and isinstance(value, (str, int, float)) and not isinstance(value, bool):
		return not value
	return False


def _required_message(descriptor: FieldDescriptor) -> str:
	sources = descriptor.sources()
	if not sources:
		return f"Required field empty, define field {descriptor.name}"
	return "Required field empty, define " + " or define ".join(sources)


def check_required(target: Any, descriptors: Iterable[FieldDescriptor]) -> None:
	"""Presence pass over already extracted descriptors."""
	for descriptor in descriptors:
		if not descriptor.required:
			continue
		if descriptor.semantic.kind is Kind.UNSUPPORTED:
			raise UnsupportedTypeError(
				f"field {descriptor.name} with type {descriptor.semantic.label} is unsupported",
				field=descriptor.name
			)
		if is_empty(descriptor.semantic, getattr(target, descriptor.name, None)):
			raise RequiredFieldError(_required_message(descriptor), field=descriptor.name)
	LOG.debug("required fields present on %s", type(target).__name__)


def validate_required(target: Any) -> None:
	"""
	Fail on the first required field that is still empty.

	:param target: Filled dataclass instance.
	:raises RequiredFieldError: ``"Required field empty, define parameter port or define env PORT"``.
	:raises UnsupportedTypeError: When a required field has an unsupported type.
	"""
	check_required(target, describe_fields(target))


# ------------------------------ Validation hooks ----------------------------
def _run_hook(value: Any, ctx: Any, label: str) -> None:
	try:
		value.validate(ctx)
	except Exception as exc:
		raise FieldValidationError(f"{label} validation failed: {exc}") from exc


def validate_has_validation(target: Any, ctx: Any = None) -> None:
	"""
	Run ``validate(ctx)`` hooks: the target's own first, then each public field.

	``None`` values are skipped. A list with its own hook is validated as a
	whole, otherwise element by element. Runs regardless of ``required``.

	:param target: Filled dataclass instance.
	:param ctx: Opaque context handed to every hook unchanged.
	:raises FieldValidationError: ``"field Port (Port) validation failed: ..."``.
	"""
	if has_hook(target, "validate"):
		_run_hook(target, ctx, type(target).__name__)

	for descriptor in describe_fields(target, include_bare=True):
		value = getattr(target, descriptor.name, None)
		if value is None:
			continue
		label = f"field {descriptor.name} ({descriptor.semantic.label})"
		try:
			if has_hook(value, "validate"):
				_run_hook(value, ctx, label)
			elif is_list_value(value):
				for index, item in enumerate(value):
					if item is not None and has_hook(item, "validate"):
						_run_hook(item, ctx, f"field {descriptor.name}[{index}] ({type(item).__name__})")
		except FieldValidationError as exc:
			exc.field = descriptor.name
			raise
	LOG.debug("validation hooks passed on %s", type(target).__name__)


__all__ = ["is_empty", "check_required", "validate_required", "validate_has_validation"]
