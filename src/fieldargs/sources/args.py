# src/fieldargs/sources/args.py
"""
Command-line source.

A fresh :class:`argparse.ArgumentParser` is built for every call from the
descriptors' ``arg`` names, so concurrent calls on different targets never
share flag state. Every field becomes ``-name``/``--name`` and accepts both
``-name value`` and ``-name=value``; boolean fields also accept a bare flag.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Any, Dict, Iterable, List, NoReturn, Optional, Sequence

from ..convert import convert_text
from ..errors import ArgumentsError, UnsupportedTypeError
from ..fields import FieldDescriptor, describe_fields
from ..kinds import TEMPORAL_KINDS, Kind

LOG = logging.getLogger(__name__)

_EXPLICIT = "_fieldargs_explicit"
_NUMBER = re.compile(r"-\d+(\.\d*)?$|-\.\d+$")


class _FlagParser(argparse.ArgumentParser):
	"""ArgumentParser that raises :class:`ArgumentsError` unless asked to exit."""

	def __init__(self, *args: Any, exit_on_failure: bool = False, **kwargs: Any) -> None:
		super().__init__(*args, **kwargs)
		self.exit_on_failure = exit_on_failure

	def error(self, message: str) -> NoReturn:
		if self.exit_on_failure:
			super().error(message)
		raise ArgumentsError(message, usage=self.format_usage())


class _RecordingAction(argparse.Action):
	"""Store the raw text and remember that the option was given explicitly."""

	def __call__(
			self,
			parser: argparse.ArgumentParser,
			namespace: argparse.Namespace,
			values: Any,
			option_string: Optional[str] = None
	) -> None:
		setattr(namespace, self.dest, values)
		getattr(namespace, _EXPLICIT).add(self.dest)


def _build_arg_parser(
		descriptors: Sequence[FieldDescriptor],
		*,
		prog: Optional[str] = None,
		exit_on_error: bool = False
) -> argparse.ArgumentParser:
	"""
	Build the per-call parser for the given descriptors.

	:param descriptors: Descriptors with an ``arg`` name.
	:param prog: Program name for usage text.
	:param exit_on_error: Print usage and exit with status 2 on bad input.
	:return: Configured parser.
	"""
	parser = _FlagParser(
		prog=prog,
		add_help=False,
		allow_abbrev=False,
		exit_on_failure=exit_on_error,
	)
	for descriptor in descriptors:
		flags = [f"-{descriptor.arg}", f"--{descriptor.arg}"]
		help_text = descriptor.usage or None
		if descriptor.default:
			help_text = f"{descriptor.usage} (default: {descriptor.default})".strip()
		kwargs: Dict[str, Any] = {
			"dest": descriptor.name,
			"action": _RecordingAction,
			"default": descriptor.default,
			"help": help_text.replace("%", "%%") if help_text else None,
			"metavar": descriptor.semantic.kind.value.upper(),
		}
		if descriptor.semantic.kind is Kind.BOOL:
			kwargs.update(nargs="?", const="true")
		try:
			parser.add_argument(*flags, **kwargs)
		except argparse.ArgumentError as exc:
			raise ArgumentsError(f"cannot register argument {descriptor.arg}: {exc}") from exc
	return parser


def _attach_values(argv: Sequence[str], descriptors: Iterable[FieldDescriptor]) -> List[str]:
	"""
	Rewrite ``-name value`` as ``-name=value`` for every non-bool option.

	The following token is always the option's value, even when it starts
	with a dash (``-wait -1h``). Tokens after ``--`` are left alone.
	"""
	valued = set()
	for descriptor in descriptors:
		if descriptor.semantic.kind is not Kind.BOOL:
			valued.update((f"-{descriptor.arg}", f"--{descriptor.arg}"))

	out: List[str] = []
	tokens = iter(argv)
	for token in tokens:
		if token == "--":
			out.append(token)
			out.extend(tokens)
			break
		if token in valued:
			value = next(tokens, None)
			out.append(token if value is None else f"{token}={value}")
			continue
		out.append(token)
	return out


def _unset_on_empty(descriptor: FieldDescriptor) -> bool:
	semantic = descriptor.semantic
	if semantic.kind is Kind.LIST:
		return False
	return semantic.optional or semantic.kind in TEMPORAL_KINDS


def resolve_arguments(
		descriptors: Iterable[FieldDescriptor],
		argv: Sequence[str],
		*,
		prog: Optional[str] = None,
		exit_on_error: bool = False
) -> Dict[str, Any]:
	"""
	Parse *argv* against the descriptors with an ``arg`` name.

	- explicit value: converted; empty text on an optional or temporal field
	  falls back to the default (or stays absent), on a list it gives ``[]``;
	- omitted with a default: the converted default;
	- omitted without a default: the zero value for text/bool/int/float
	  fields, absent for everything else.

	:param descriptors: Field descriptors.
	:param argv: Argument vector without the program name.
	:param prog: Program name for usage text.
	:param exit_on_error: Exit with status 2 (after printing usage) on an
	                      unknown flag instead of raising.
	:return: Argument value map.
	:raises UnsupportedTypeError: Before parsing, for an unsupported field type.
	:raises ArgumentsError: On an unknown flag or a missing option value.
	:raises ParseFieldError: On malformed values.
	"""
	bound = [descriptor for descriptor in descriptors if descriptor.arg]
	for descriptor in bound:
		if descriptor.semantic.kind is Kind.UNSUPPORTED:
			raise UnsupportedTypeError(
				f"field {descriptor.name} with type {descriptor.semantic.label} is unsupported",
				field=descriptor.name
			)

	parser = _build_arg_parser(bound, prog=prog, exit_on_error=exit_on_error)
	namespace = argparse.Namespace(**{_EXPLICIT: set()})
	namespace, extras = parser.parse_known_args(_attach_values(argv, bound), namespace)

	for extra in extras:
		if extra.startswith("-") and extra not in ("-", "--") and not _NUMBER.match(extra):
			parser.error(f"flag provided but not defined: {extra}")
	if extras:
		LOG.debug("ignoring positional arguments: %s", extras)

	explicit = getattr(namespace, _EXPLICIT)
	values: Dict[str, Any] = {}
	for descriptor in bound:
		if descriptor.name in explicit:
			text = getattr(namespace, descriptor.name)
			if text == "" and _unset_on_empty(descriptor):
				text = descriptor.default
		else:
			text = descriptor.default

		if text is None:
			zero = descriptor.semantic.zero()
			if zero is not None:
				values[descriptor.name] = zero
			continue

		value = convert_text(
			descriptor.semantic,
			text,
			field_name=descriptor.name,
			separator=descriptor.separator
		)
		if value is not None:
			values[descriptor.name] = value
	LOG.debug("arguments resolved: %d value(s)", len(values))
	return values


def argument_values(
		target: Any,
		argv: Optional[Sequence[str]] = None,
		*,
		exit_on_error: bool = False
) -> Dict[str, Any]:
	"""
	Argument value map of a configuration target.

	:param target: Dataclass instance.
	:param argv: Argument vector; ``sys.argv[1:]`` when omitted.
	:param exit_on_error: Exit with status 2 on an unknown flag.
	:return: Mapping field name -> typed value.
	"""
	return resolve_arguments(
		describe_fields(target),
		sys.argv[1:] if argv is None else argv,
		exit_on_error=exit_on_error
	)


def format_usage(target: Any, *, prog: Optional[str] = None) -> str:
	"""
	Help text of the options a target accepts.

	:param target: Dataclass instance.
	:param prog: Program name shown in the usage line.
	:return: Multi-line help text.
	"""
	bound: List[FieldDescriptor] = [d for d in describe_fields(target) if d.arg]
	return _build_arg_parser(bound, prog=prog).format_help()


__all__ = ["resolve_arguments", "argument_values", "format_usage"]
