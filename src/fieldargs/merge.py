# src/fieldargs/merge.py
"""
Merge resolved value maps and assign them onto the configuration target.

Assignment is direct (``setattr``); values are only rebuilt where the field's
type needs it: list elements become the element type, list subclasses are
rebuilt as themselves, named scalars as their named type, and values carrying
``to_text`` are re-decoded through the field type's ``from_text`` hook.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Mapping, Optional

from .convert import convert_text
from .errors import ConfigError, FillError
from .fields import FieldDescriptor, describe_fields
from .kinds import SCALAR_KINDS, TEMPORAL_KINDS, Kind, SemanticType, has_hook, is_list_value
from .timeparse import UnixTime

LOG = logging.getLogger(__name__)


def merge_values(*maps: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
	"""
	Combine value maps; later maps override earlier ones key by key.

	:param maps: Value maps in increasing precedence (``None`` entries are skipped).
	:return: New merged map.
	"""
	merged: Dict[str, Any] = {}
	for values in maps:
		if values:
			merged.update(values)
	return merged


# -------------------------------- Coercion ----------------------------------
def _fail(field_name: str, semantic: SemanticType, value: Any, reason: str = "") -> FillError:
	message = f"fill field {field_name} as {semantic.label} failed: cannot use {type(value).__name__} {value!r}"
	if reason:
		message = f"{message} ({reason})"
	return FillError(message, field=field_name)


def _coerce_scalar(semantic: SemanticType, value: Any, field_name: str) -> Any:
	primitive = semantic.primitive
	if isinstance(value, str) and primitive is not str:
		return convert_text(semantic, value, field_name=field_name)
	if isinstance(value, bool) and primitive is not bool:
		raise _fail(field_name, semantic, value)
	if primitive is float and isinstance(value, int):
		value = float(value)
	if not isinstance(value, primitive):
		raise _fail(field_name, semantic, value)
	if semantic.bounds is not None:
		low, high = semantic.bounds
		if not low <= value <= high:
			raise _fail(field_name, semantic, value, f"out of range {low}..{high}")
	if isinstance(semantic.type, type) and type(value) is semantic.type:
		return value
	return semantic.build(value)


def _coerce_temporal(semantic: SemanticType, value: Any, field_name: str) -> Any:
	if isinstance(value, str):
		return convert_text(semantic, value, field_name=field_name)
	kind = semantic.kind
	if kind is Kind.DURATION and isinstance(value, timedelta):
		return value
	if kind is Kind.UNIXTIME and isinstance(value, datetime):
		return value if isinstance(value, UnixTime) else UnixTime.from_seconds(int(value.timestamp()))
	if kind is Kind.DATETIME and isinstance(value, datetime):
		return value
	if kind is Kind.DATE and isinstance(value, date) and not isinstance(value, datetime):
		return value
	raise _fail(field_name, semantic, value)


def _coerce_custom(semantic: SemanticType, value: Any, field_name: str) -> Any:
	cls = semantic.type
	if isinstance(value, str) and not isinstance(value, cls):
		text = value
	elif has_hook(value, "to_text"):
		text = value.to_text()
	elif isinstance(value, cls):
		return value
	else:
		raise _fail(field_name, semantic, value)
	try:
		return cls.from_text(text)
	except Exception as exc:
		raise FillError(f"fill field {field_name} as {semantic.label} failed: {exc}", field=field_name) from exc


def coerce_value(semantic: SemanticType, value: Any, *, field_name: str) -> Any:
	"""
	Bring *value* into the representation of the field type.

	:param semantic: Classified field type.
	:param value: Resolved value.
	:param field_name: Field name for error messages.
	:return: Value ready for assignment.
	:raises FillError: When the value cannot represent the field type.
	"""
	if value is None:
		if semantic.optional:
			return None
		raise _fail(field_name, semantic, value)

	kind = semantic.kind
	try:
		if kind is Kind.CUSTOM:
			return _coerce_custom(semantic, value, field_name)
		if kind is Kind.LIST:
			if not is_list_value(value):
				raise _fail(field_name, semantic, value)
			items = [
				coerce_value(semantic.element, item, field_name=f"{field_name}[{index}]")
				for index, item in enumerate(value)
			]
			return semantic.container(items)
		if kind in SCALAR_KINDS:
			return _coerce_scalar(semantic, value, field_name)
		if kind in TEMPORAL_KINDS:
			return _coerce_temporal(semantic, value, field_name)
	except FillError:
		raise
	except ConfigError as exc:
		raise FillError(str(exc), field=field_name) from exc
	raise _fail(field_name, semantic, value, "unsupported type")


# ---------------------------------- Fill ------------------------------------
def assign_values(target: Any, descriptors: Iterable[FieldDescriptor], values: Mapping[str, Any]) -> None:
	"""
	Assign *values* onto *target* using already extracted descriptors.

	:raises FillError: On unknown keys or values the field cannot hold.
	"""
	by_name = {descriptor.name: descriptor for descriptor in descriptors}
	for name, value in values.items():
		descriptor = by_name.get(name)
		if descriptor is None:
			raise FillError(f"{type(target).__name__} has no configurable field {name!r}", field=name)
		coerced = coerce_value(descriptor.semantic, value, field_name=name)
		try:
			setattr(target, name, coerced)
		except AttributeError as exc:
			raise FillError(f"cannot assign field {name}: {exc}", field=name) from exc
	LOG.debug("filled %d field(s) on %s", len(values), type(target).__name__)


def fill(target: Any, values: Mapping[str, Any]) -> Any:
	"""
	Assign a value map onto a configuration target.

	Keys absent from *values* leave the target untouched.

	:param target: Dataclass instance (mutated in place).
	:param values: Mapping field name -> value.
	:return: The same *target*.
	:raises FillError: On unknown keys or values the field cannot hold.
	"""
	assign_values(target, describe_fields(target, include_bare=True), values)
	return target


__all__ = ["merge_values", "coerce_value", "assign_values", "fill"]
