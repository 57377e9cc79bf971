# src/fieldargs/fields.py
"""
Per-field metadata model.

Configuration targets are dataclasses; each field declares where its value
comes from through ``dataclasses.field(metadata=...)``, normally via
:func:`option`::

	@dataclass
	class Settings:
		listen: str = option(arg="listen", env="LISTEN", default=":8080", usage="address")
		password: str = option(env="PASSWORD", required=True, display="length")
		debug: bool = option(arg="debug", default="false")

:func:`describe_fields` turns such an instance into an ordered list of
:class:`FieldDescriptor` consumed by every later stage.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .convert import DEFAULT_SEPARATOR
from .errors import TargetError
from .kinds import SemanticType, classify

LOG = logging.getLogger(__name__)


class Display(str, Enum):
	"""How the printer shows a field's value."""
	NORMAL = "normal"
	LENGTH = "length"
	HIDDEN = "hidden"

	@classmethod
	def coerce(cls, value: Union["Display", str, None]) -> "Display":
		if value is None or value == "":
			return cls.NORMAL
		if isinstance(value, cls):
			return value
		try:
			return cls(str(value).strip().lower())
		except ValueError:
			allowed = ", ".join(member.value for member in cls)
			raise ValueError(f"unknown display {value!r}, expected one of: {allowed}") from None


def _truthy(value: Any) -> bool:
	if isinstance(value, str):
		return value.strip().lower() == "true"
	return bool(value)


# ------------------------------- Declaration --------------------------------
def option(
		*,
		arg: Optional[str] = None,
		env: Optional[str] = None,
		default: Optional[str] = None,
		required: bool = False,
		separator: str = DEFAULT_SEPARATOR,
		display: Union[Display, str] = Display.NORMAL,
		usage: str = "",
		initial: Any = None,
		initial_factory: Optional[Callable[[], Any]] = None
) -> Any:
	"""
	Build a dataclass field carrying source metadata.

	:param arg: Command-line name (registered as ``-name`` and ``--name``).
	:param env: Environment variable name.
	:param default: Default as *text*; parsed like any other source.
	                ``None`` means no default, ``""`` is an empty default.
	:param required: Fail the presence check when the value stays empty.
	:param separator: Separator for list fields.
	:param display: ``"normal"``, ``"length"`` or ``"hidden"`` for the printer.
	:param usage: Help text for the command-line option.
	:param initial: Value the dataclass constructor uses (``None`` by default).
	:param initial_factory: Factory for a mutable initial value (e.g. ``list``).
	:return: A ``dataclasses.Field``.
	:raises ValueError: On an unknown display value or non-string names.
	"""
	for key, value in (("arg", arg), ("env", env), ("default", default)):
		if value is not None and not isinstance(value, str):
			raise ValueError(f"option {key} must be a string, got {type(value).__name__}")
	if arg is not None and (not arg or arg.startswith("-")):
		raise ValueError(f"option arg must be a bare name without dashes, got {arg!r}")
	if not isinstance(separator, str) or not separator:
		raise ValueError("option separator must be a non-empty string")

	metadata = {
		"arg": arg,
		"env": env,
		"default": default,
		"required": bool(required),
		"separator": separator,
		"display": Display.coerce(display),
		"usage": usage,
	}
	if initial_factory is not None:
		return dataclasses.field(default_factory=initial_factory, metadata=metadata)
	return dataclasses.field(default=initial, metadata=metadata)


# -------------------------------- Descriptors -------------------------------
@dataclass(frozen=True)
class FieldDescriptor:
	"""
	Everything later stages need to know about one configuration field.

	:param name: Dataclass field name (key in every value map).
	:param semantic: Classified annotation.
	:param arg: Command-line name, if any.
	:param env: Environment variable name, if any.
	:param default: Default text; ``None`` when absent.
	:param required: Presence check enabled.
	:param separator: List separator.
	:param display: Printer policy.
	:param usage: Option help text.
	"""
	name: str
	semantic: SemanticType
	arg: Optional[str] = None
	env: Optional[str] = None
	default: Optional[str] = None
	required: bool = False
	separator: str = DEFAULT_SEPARATOR
	display: Display = Display.NORMAL
	usage: str = ""

	@property
	def has_source(self) -> bool:
		return self.arg is not None or self.env is not None or self.default is not None

	def sources(self) -> List[str]:
		"""Human-readable source names ("parameter listen", "env LISTEN")."""
		names = []
		if self.arg:
			names.append(f"parameter {self.arg}")
		if self.env:
			names.append(f"env {self.env}")
		return names


def _descriptor(name: str, annotation: Any, metadata: Dict[str, Any]) -> FieldDescriptor:
	default = metadata.get("default")
	return FieldDescriptor(
		name=name,
		semantic=classify(annotation),
		arg=metadata.get("arg") or None,
		env=metadata.get("env") or None,
		default=None if default is None else str(default),
		required=_truthy(metadata.get("required", False)),
		separator=metadata.get("separator") or DEFAULT_SEPARATOR,
		display=Display.coerce(metadata.get("display")),
		usage=str(metadata.get("usage") or ""),
	)


def describe_fields(target: Any, *, include_bare: bool = False) -> List[FieldDescriptor]:
	"""
	Produce ordered descriptors for the public fields of a dataclass instance.

	Fields named ``_like_this`` are ignored. Fields with neither ``arg``,
	``env`` nor ``default`` are skipped unless *include_bare* is set.

	:param target: Dataclass instance.
	:param include_bare: Also return fields without any source metadata.
	:return: Descriptors in field declaration order.
	:raises TargetError: When *target* is not a dataclass instance or its
	                     annotations cannot be resolved.
	"""
	if not dataclasses.is_dataclass(target) or isinstance(target, type):
		raise TargetError(f"configuration target must be a dataclass instance, got {type(target).__name__}")

	cls = type(target)
	try:
		hints = typing.get_type_hints(cls)
	except Exception as exc:
		raise TargetError(f"cannot resolve annotations of {cls.__name__}: {exc}") from exc

	out: List[FieldDescriptor] = []
	for field in dataclasses.fields(target):
		if field.name.startswith("_"):
			continue
		descriptor = _descriptor(field.name, hints.get(field.name, field.type), dict(field.metadata))
		if not include_bare and not descriptor.has_source:
			continue
		out.append(descriptor)
	LOG.debug("%s: %d field descriptor(s)", cls.__name__, len(out))
	return out


__all__ = ["Display", "option", "FieldDescriptor", "describe_fields", "DEFAULT_SEPARATOR"]
