# src/fieldargs/convert.py
"""
Text -> typed value dispatch.

One entry point, :func:`convert_text`, used by every source resolver. The
rules are applied in order: custom ``from_text`` hook, list, named scalar,
primitive/temporal. Failures surface as :class:`ParseFieldError` (bad text)
or :class:`UnsupportedTypeError` (bad annotation), both naming the field.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List

from .errors import ParseFieldError, UnsupportedTypeError
from .kinds import Kind, SemanticType, has_hook
from .timeparse import format_temporal, parse_date, parse_datetime, parse_duration, parse_unix

DEFAULT_SEPARATOR = ","

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT_TEXT = re.compile(r"[+-]?\d+")


# ------------------------------ Primitive parsers ---------------------------
def parse_bool(text: str) -> bool:
	if text in _TRUE:
		return True
	if text in _FALSE:
		return False
	raise ValueError(f"invalid syntax {text!r}, expected true/false/1/0")


def parse_int(text: str, bounds: Any = None) -> int:
	if not _INT_TEXT.fullmatch(text):
		raise ValueError(f"invalid syntax {text!r}")
	value = int(text)
	if bounds is not None:
		low, high = bounds
		if not low <= value <= high:
			raise ValueError(f"value out of range {text!r}, expected {low}..{high}")
	return value


def parse_float(text: str) -> float:
	if not text or text != text.strip():
		raise ValueError(f"invalid syntax {text!r}")
	try:
		return float(text)
	except ValueError as exc:
		raise ValueError(f"invalid syntax {text!r}") from exc


def _scalar(semantic: SemanticType, text: str) -> Any:
	kind = semantic.kind
	if kind is Kind.TEXT:
		value: Any = text
	elif kind is Kind.BOOL:
		value = parse_bool(text)
	elif kind is Kind.INT:
		value = parse_int(text, semantic.bounds)
	else:
		value = parse_float(text)
	return semantic.build(value)


_CONVERTERS: Dict[Kind, Callable[[SemanticType, str], Any]] = {
	Kind.TEXT: _scalar,
	Kind.BOOL: _scalar,
	Kind.INT: _scalar,
	Kind.FLOAT: _scalar,
	Kind.DURATION: lambda semantic, text: parse_duration(text),
	Kind.DATETIME: lambda semantic, text: parse_datetime(text),
	Kind.DATE: lambda semantic, text: parse_date(text),
	Kind.UNIXTIME: lambda semantic, text: parse_unix(text),
}


# --------------------------------- Dispatch ---------------------------------
def split_list(text: str, separator: str = DEFAULT_SEPARATOR) -> List[str]:
	"""
	Split *text* on *separator*, trim each segment and drop empty ones.

	:param text: Raw list text (``"alice, bob,,charlie"``).
	:param separator: Segment separator.
	:return: Non-empty trimmed segments (``[]`` for blank input).
	"""
	if not text.strip():
		return []
	segments = (segment.strip() for segment in text.split(separator or DEFAULT_SEPARATOR))
	return [segment for segment in segments if segment]


def decode_custom(semantic: SemanticType, text: str, *, field_name: str) -> Any:
	"""Run the type's ``from_text`` hook and attach field context on failure."""
	try:
		return semantic.type.from_text(text)
	except Exception as exc:
		raise ParseFieldError(
			f"parse field {field_name} as {semantic.label} failed: {exc}",
			field=field_name
		) from exc


def convert_text(
		semantic: SemanticType,
		text: str,
		*,
		field_name: str,
		separator: str = DEFAULT_SEPARATOR
) -> Any:
	"""
	Convert source *text* into a value of the field's semantic type.

	``Optional[...]`` fields map empty text to ``None`` (absent); list fields
	map empty text to an empty list.

	:param semantic: Classified field type.
	:param text: Raw source text.
	:param field_name: Field name for error messages.
	:param separator: List separator.
	:return: Typed value, or ``None`` when an optional field gets empty text.
	:raises ParseFieldError: When the text is malformed for the type.
	:raises UnsupportedTypeError: When the type is outside the supported set.
	"""
	kind = semantic.kind
	if kind is Kind.UNSUPPORTED:
		raise UnsupportedTypeError(
			f"field {field_name} with type {semantic.label} is unsupported",
			field=field_name
		)
	if semantic.optional and text == "" and kind is not Kind.LIST:
		return None

	if kind is Kind.CUSTOM:
		return decode_custom(semantic, text, field_name=field_name)

	if kind is Kind.LIST:
		element = semantic.element
		values = [
			convert_text(element, segment, field_name=f"{field_name}[{index}]", separator=separator)
			for index, segment in enumerate(split_list(text, separator))
		]
		return semantic.container(values)

	try:
		return _CONVERTERS[kind](semantic, text)
	except (ValueError, OverflowError) as exc:
		raise ParseFieldError(
			f"parse field {field_name} as {semantic.label} failed: {exc}",
			field=field_name
		) from exc


# --------------------------------- Rendering --------------------------------
def render_value(value: Any) -> str:
	"""
	Text form of a resolved value for diagnostics.

	Booleans as ``true``/``false``, durations as ``26h30m0s``, datetimes in
	RFC 3339, values with ``to_text`` via that hook, everything else ``str``.
	"""
	if isinstance(value, bool):
		return "true" if value else "false"
	if has_hook(value, "to_text"):
		return str(value.to_text())
	if isinstance(value, (timedelta, datetime, date)):
		return format_temporal(value)
	return str(value)


__all__ = [
	"DEFAULT_SEPARATOR",
	"parse_bool",
	"parse_int",
	"parse_float",
	"split_list",
	"decode_custom",
	"convert_text",
	"render_value",
]
