# src/fieldargs/kinds.py
"""
Closed set of semantic types a configuration field may have.

:func:`classify` maps a (resolved) type annotation onto a :class:`SemanticType`
once per field; conversion, fill, validation and printing all dispatch on its
:class:`Kind`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Protocol, Tuple, Union, get_args, get_origin, runtime_checkable

from .timeparse import UnixTime

if sys.version_info >= (3, 10):
	from types import UnionType
else:  # pragma: no cover
	UnionType = None


class Kind(Enum):
	TEXT = "text"
	BOOL = "bool"
	INT = "int"
	FLOAT = "float"
	DURATION = "duration"
	DATETIME = "datetime"
	DATE = "date"
	UNIXTIME = "unixtime"
	LIST = "list"
	CUSTOM = "custom"
	UNSUPPORTED = "unsupported"


SCALAR_KINDS = frozenset({Kind.TEXT, Kind.BOOL, Kind.INT, Kind.FLOAT})
TEMPORAL_KINDS = frozenset({Kind.DURATION, Kind.DATETIME, Kind.DATE, Kind.UNIXTIME})


# ------------------------------ Fixed-width ints ----------------------------
class FixedInt(int):
	"""Base for integers with an explicit bit width; plain ``int`` is 64-bit signed."""
	bits = 64
	signed = True

	@classmethod
	def bounds(cls) -> Tuple[int, int]:
		if cls.signed:
			return -(1 << (cls.bits - 1)), (1 << (cls.bits - 1)) - 1
		return 0, (1 << cls.bits) - 1


class Int32(FixedInt):
	bits = 32


class Int64(FixedInt):
	bits = 64


class UInt(FixedInt):
	bits = 64
	signed = False


class UInt32(FixedInt):
	bits = 32
	signed = False


class UInt64(FixedInt):
	bits = 64
	signed = False


INT_BOUNDS: Tuple[int, int] = Int64.bounds()

_PRIMITIVES = {str: Kind.TEXT, bool: Kind.BOOL, int: Kind.INT, float: Kind.FLOAT}
_BUILTIN_INTS = (int, Int32, Int64, UInt, UInt32, UInt64)


# -------------------------------- Protocols ---------------------------------
@runtime_checkable
class TextDecodable(Protocol):
	"""Type that builds itself from source text; ``from_text`` raises on bad input."""

	@classmethod
	def from_text(cls, text: str) -> Any: ...


@runtime_checkable
class TextEncodable(Protocol):
	def to_text(self) -> str: ...


@runtime_checkable
class HasValidation(Protocol):
	"""Value (or configuration target) that checks itself; ``validate`` raises on failure."""

	def validate(self, ctx: Any) -> None: ...


# ------------------------------- SemanticType -------------------------------
@dataclass(frozen=True)
class SemanticType:
	"""
	Classified field annotation.

	:param kind: Dispatch kind.
	:param type: Concrete type used to build values (a class, or a ``NewType``).
	:param label: Human-readable type name for error messages.
	:param primitive: Builtin representation for scalar kinds (``str``, ``int``, ...).
	:param optional: Annotation was ``Optional[...]``.
	:param named: User type whose representation is a primitive.
	:param element: Element type for :attr:`Kind.LIST`.
	:param bounds: Inclusive ``(min, max)`` for integer kinds.
	"""
	kind: Kind
	type: Any
	label: str
	primitive: Optional[type] = None
	optional: bool = False
	named: bool = False
	element: Optional["SemanticType"] = None
	bounds: Optional[Tuple[int, int]] = None

	@property
	def container(self) -> type:
		"""Concrete list type to build for :attr:`Kind.LIST` values."""
		if isinstance(self.type, type) and issubclass(self.type, list):
			return self.type
		return list

	def build(self, value: Any) -> Any:
		"""Rebuild a primitive *value* as this (possibly named) scalar type."""
		if self.type is bool:
			return bool(value)
		return self.type(value)

	def zero(self) -> Any:
		"""Zero value for scalar kinds, ``None`` for everything else."""
		if self.optional or self.kind not in SCALAR_KINDS:
			return None
		return self.build(self.primitive())


def has_hook(obj: Any, name: str) -> bool:
	return callable(getattr(obj, name, None))


def type_label(annotation: Any) -> str:
	"""Short type name for messages: ``int``, ``Optional[Port]``, ``list[str]``."""
	if annotation is type(None):
		return "None"
	args = get_args(annotation)
	if _is_union(annotation):
		members = [arg for arg in args if arg is not type(None)]
		if len(members) == 1 and len(args) == 2:
			return f"Optional[{type_label(members[0])}]"
		return "Union[" + ", ".join(type_label(arg) for arg in args) + "]"
	origin = get_origin(annotation)
	if origin is not None and args:
		name = getattr(origin, "__name__", None) or repr(origin).replace("typing.", "")
		return f"{name}[{', '.join(type_label(arg) for arg in args)}]"
	if isinstance(annotation, type) or hasattr(annotation, "__supertype__"):
		return annotation.__name__
	return repr(annotation).replace("typing.", "")


def _is_union(annotation: Any) -> bool:
	origin = get_origin(annotation)
	return origin is Union or (UnionType is not None and isinstance(annotation, UnionType))


def _list_element(annotation: Any) -> Tuple[bool, Any]:
	"""Return ``(is_list, element_annotation)`` for list annotations and list subclasses."""
	origin = get_origin(annotation)
	if origin is list:
		args = get_args(annotation)
		return True, (args[0] if args else None)
	if isinstance(annotation, type) and issubclass(annotation, list):
		for base in getattr(annotation, "__orig_bases__", ()):
			if get_origin(base) is list:
				args = get_args(base)
				return True, (args[0] if args else None)
		return True, None
	return False, None


def classify(annotation: Any) -> SemanticType:
	"""
	Map a resolved annotation onto a :class:`SemanticType`.

	Order: optional wrapper, custom ``from_text`` hook, list, ``NewType``,
	builtin temporal types, primitives and their subclasses. Anything else is
	:attr:`Kind.UNSUPPORTED`.

	:param annotation: Annotation as returned by ``typing.get_type_hints``.
	:return: The classified type (never raises).
	"""
	label = type_label(annotation)

	if _is_union(annotation):
		members = [arg for arg in get_args(annotation) if arg is not type(None)]
		if len(members) == 1 and len(get_args(annotation)) == 2:
			inner = classify(members[0])
			if inner.kind is Kind.UNSUPPORTED:
				return replace(inner, label=label)
			return replace(inner, optional=True, label=label)
		return SemanticType(Kind.UNSUPPORTED, annotation, label)

	if isinstance(annotation, type) and has_hook(annotation, "from_text"):
		return SemanticType(Kind.CUSTOM, annotation, label)

	is_list, element = _list_element(annotation)
	if is_list:
		if element is None:
			return SemanticType(Kind.UNSUPPORTED, annotation, label)
		inner = classify(element)
		if inner.kind in (Kind.UNSUPPORTED, Kind.LIST):
			return SemanticType(Kind.UNSUPPORTED, annotation, label)
		return SemanticType(Kind.LIST, annotation, label, element=inner)

	supertype = getattr(annotation, "__supertype__", None)
	if supertype is not None:
		base = classify(supertype)
		if base.kind not in SCALAR_KINDS or base.optional:
			return SemanticType(Kind.UNSUPPORTED, annotation, label)
		return replace(base, type=annotation, label=label, named=True)

	if not isinstance(annotation, type):
		return SemanticType(Kind.UNSUPPORTED, annotation, label)

	if annotation is timedelta:
		return SemanticType(Kind.DURATION, annotation, label)
	if annotation is UnixTime:
		return SemanticType(Kind.UNIXTIME, annotation, label)
	if annotation is datetime:
		return SemanticType(Kind.DATETIME, annotation, label)
	if annotation is date:
		return SemanticType(Kind.DATE, annotation, label)

	if annotation is bool:
		return SemanticType(Kind.BOOL, bool, label, primitive=bool)
	if issubclass(annotation, int) and not issubclass(annotation, bool):
		bounds = annotation.bounds() if issubclass(annotation, FixedInt) else INT_BOUNDS
		named = annotation not in _BUILTIN_INTS
		return SemanticType(Kind.INT, annotation, label, primitive=int, named=named, bounds=bounds)
	for primitive in (str, float):
		if issubclass(annotation, primitive):
			return SemanticType(
				_PRIMITIVES[primitive], annotation, label,
				primitive=primitive, named=annotation is not primitive
			)

	return SemanticType(Kind.UNSUPPORTED, annotation, label)


def is_list_value(value: Any) -> bool:
	return isinstance(value, (list, tuple))


__all__ = [
	"Kind",
	"SCALAR_KINDS",
	"TEMPORAL_KINDS",
	"FixedInt",
	"Int32",
	"Int64",
	"UInt",
	"UInt32",
	"UInt64",
	"INT_BOUNDS",
	"TextDecodable",
	"TextEncodable",
	"HasValidation",
	"SemanticType",
	"classify",
	"has_hook",
	"type_label",
	"is_list_value",
]
