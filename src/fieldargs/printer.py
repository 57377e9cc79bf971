# src/fieldargs/printer.py

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .convert import render_value
from .fields import Display, describe_fields
from .kinds import is_list_value
from .logutil import get_logger

LOG = get_logger(__name__)

NONE_MARKER = "<none>"


def _joiner(separator: str) -> str:
	return separator if separator[-1:].isspace() else f"{separator} "


def _render_field(value: Any, separator: str) -> str:
	if value is None:
		return NONE_MARKER
	if is_list_value(value):
		return _joiner(separator).join(render_value(item) for item in value)
	return render_value(value)


def format_arguments(target: Any) -> List[str]:
	"""
	Render every public field of *target* as one diagnostic line.

	- ``hidden`` fields are skipped;
	- ``length`` fields show only the length of the rendered value;
	- lists show their count and separator-joined elements (``Argument: names [2]: a, b``);
	- ``None`` shows as ``<none>``;
	- everything else as ``Argument: name 'value'``.

	:param target: Dataclass instance.
	:return: Lines in field order.
	"""
	lines: List[str] = []
	for descriptor in describe_fields(target, include_bare=True):
		if descriptor.display is Display.HIDDEN:
			continue
		value = getattr(target, descriptor.name, None)
		prefix = f"Argument: {descriptor.name}"
		text = _render_field(value, descriptor.separator)

		if descriptor.display is Display.LENGTH:
			lines.append(f"{prefix} length {len(text)}")
		elif value is None:
			lines.append(f"{prefix} {text}")
		elif is_list_value(value):
			lines.append(f"{prefix} [{len(value)}]: {text}" if value else f"{prefix} []")
		else:
			lines.append(f"{prefix} '{text}'")
	return lines


def print_arguments(target: Any, *, logger: Optional[logging.Logger] = None) -> None:
	"""
	Log the resolved values of *target* at INFO, honoring each field's display policy.

	:param target: Dataclass instance.
	:param logger: Logger to write to; the package printer logger by default.
	"""
	log = logger or LOG
	for line in format_arguments(target):
		log.info(line)


__all__ = ["NONE_MARKER", "format_arguments", "print_arguments"]
