# src/fieldargs/sources/env.py

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..convert import convert_text
from ..fields import FieldDescriptor, describe_fields

LOG = logging.getLogger(__name__)

Environ = Union[Mapping[str, str], Iterable[str]]


def split_environ(environ: Environ) -> Dict[str, str]:
	"""
	Turn an environment block into a name -> text map.

	Entries are ``NAME=value`` strings split at the first ``=``; the last
	occurrence of a name wins. Entries without ``=`` or with an empty name
	are ignored. A mapping is taken as already split.

	:param environ: ``["A=1", "B=x=y"]`` or a mapping such as ``os.environ``.
	:return: Name -> text map.
	"""
	if isinstance(environ, Mapping):
		return {str(name): str(value) for name, value in environ.items()}

	out: Dict[str, str] = {}
	for entry in environ:
		name, sep, value = entry.partition("=")
		if not sep or not name:
			continue
		out[name] = value
	return out


def resolve_environment(descriptors: Iterable[FieldDescriptor], environ: Environ) -> Dict[str, Any]:
	"""
	Parse the values of fields whose environment variable is set.

	:param descriptors: Field descriptors.
	:param environ: Environment block or mapping.
	:return: Environment value map (unset names contribute nothing).
	:raises ParseFieldError: On malformed text.
	:raises UnsupportedTypeError: When a set variable targets an unsupported type.
	"""
	variables = split_environ(environ)
	values: Dict[str, Any] = {}
	for descriptor in descriptors:
		if descriptor.env is None or descriptor.env not in variables:
			continue
		value = convert_text(
			descriptor.semantic,
			variables[descriptor.env],
			field_name=descriptor.name,
			separator=descriptor.separator
		)
		if value is None:
			continue
		values[descriptor.name] = value
	LOG.debug("environment resolved: %d value(s)", len(values))
	return values


def environment_values(target: Any, environ: Optional[Environ] = None) -> Dict[str, Any]:
	"""
	Environment value map of a configuration target.

	:param target: Dataclass instance.
	:param environ: Environment block; ``os.environ`` when omitted.
	:return: Mapping field name -> typed value.
	"""
	return resolve_environment(describe_fields(target), os.environ if environ is None else environ)


__all__ = ["Environ", "split_environ", "resolve_environment", "environment_values"]
