# src/fieldargs/sources/defaults.py

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from ..convert import convert_text
from ..fields import FieldDescriptor, describe_fields

LOG = logging.getLogger(__name__)


def resolve_defaults(descriptors: Iterable[FieldDescriptor]) -> Dict[str, Any]:
	"""
	Parse the default text of every descriptor that declares one.

	An empty default on an ``Optional[...]`` field yields no entry.

	:param descriptors: Field descriptors.
	:return: Default value map.
	:raises ParseFieldError: On a malformed default.
	:raises UnsupportedTypeError: When a field with a default has an unsupported type.
	"""
	values: Dict[str, Any] = {}
	for descriptor in descriptors:
		if descriptor.default is None:
			continue
		value = convert_text(
			descriptor.semantic,
			descriptor.default,
			field_name=descriptor.name,
			separator=descriptor.separator
		)
		if value is None:
			continue
		values[descriptor.name] = value
	LOG.debug("defaults resolved: %d value(s)", len(values))
	return values


def default_values(target: Any) -> Dict[str, Any]:
	"""
	Default value map of a configuration target.

	:param target: Dataclass instance.
	:return: Mapping field name -> typed default.
	"""
	return resolve_defaults(describe_fields(target))


__all__ = ["resolve_defaults", "default_values"]
