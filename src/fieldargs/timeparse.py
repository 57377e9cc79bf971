# src/fieldargs/timeparse.py
"""
Text <-> temporal value primitives.

Every parser takes the raw text and returns a value or raises ``ValueError``;
callers attach the field context.

Durations use compact unit notation (``300ms``, ``1.5h``, ``-2h45m``) extended
with days (``d``) and weeks (``w``), e.g. ``1d2h30m`` or ``2w``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, Union

# unit -> microseconds (timedelta resolution)
_UNITS: Dict[str, Decimal] = {
	"ns": Decimal("0.001"),
	"us": Decimal(1),
	"µs": Decimal(1),  # U+00B5 micro sign
	"μs": Decimal(1),  # U+03BC greek mu
	"ms": Decimal(1_000),
	"s": Decimal(1_000_000),
	"m": Decimal(60_000_000),
	"h": Decimal(3_600_000_000),
	"d": Decimal(86_400_000_000),
	"w": Decimal(604_800_000_000),
}

_SEGMENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h|d|w)")
_RFC3339 = re.compile(
	r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})",
	re.ASCII
)


class UnixTime(datetime):
	"""
	Point in time given as whole seconds since the unix epoch.

	Behaves like an aware UTC :class:`datetime`; its text form is the epoch
	second count (``"1700000000"``).
	"""

	@classmethod
	def from_seconds(cls, seconds: int) -> "UnixTime":
		base = datetime.fromtimestamp(seconds, tz=timezone.utc)
		return cls(
			base.year, base.month, base.day,
			base.hour, base.minute, base.second, base.microsecond,
			tzinfo=base.tzinfo
		)

	def to_text(self) -> str:
		return str(int(self.timestamp()))

	def __str__(self) -> str:
		return self.to_text()


def parse_duration(text: str) -> timedelta:
	"""
	Parse a duration such as ``"1d2h30m"``, ``"2w"``, ``"1.5h"`` or ``"-30s"``.

	:param text: Duration text. ``"0"`` is accepted without a unit.
	:return: The parsed :class:`timedelta` (nanoseconds are rounded to microseconds).
	:raises ValueError: On empty input, unknown units or missing units.
	"""
	original = text
	if not text:
		raise ValueError('invalid duration ""')

	sign = 1
	if text[0] in "+-":
		sign = -1 if text[0] == "-" else 1
		text = text[1:]

	if text == "0":
		return timedelta(0)
	if not text:
		raise ValueError(f"invalid duration {original!r}")

	total = Decimal(0)
	pos = 0
	while pos < len(text):
		match = _SEGMENT.match(text, pos)
		if match is None:
			raise ValueError(f"invalid duration {original!r}")
		number, unit = match.groups()
		try:
			total += Decimal(number) * _UNITS[unit]
		except InvalidOperation as exc:
			raise ValueError(f"invalid duration {original!r}") from exc
		pos = match.end()

	micros = int(total.to_integral_value())
	return timedelta(microseconds=sign * micros)


def format_duration(value: timedelta) -> str:
	"""
	Render a :class:`timedelta` in compact unit notation: ``26h30m0s``, ``1.5s``, ``250ms``.

	:param value: Duration to render.
	:return: Compact textual form; ``"0s"`` for zero.
	"""
	micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
	if micros == 0:
		return "0s"
	sign = "-" if micros < 0 else ""
	micros = abs(micros)

	if micros < 1_000:
		return f"{sign}{micros}µs"
	if micros < 1_000_000:
		return f"{sign}{_trim(Decimal(micros) / 1_000)}ms"

	hours, rest = divmod(micros, 3_600_000_000)
	minutes, rest = divmod(rest, 60_000_000)
	seconds = _trim(Decimal(rest) / 1_000_000)
	if hours:
		return f"{sign}{hours}h{minutes}m{seconds}s"
	if minutes:
		return f"{sign}{minutes}m{seconds}s"
	return f"{sign}{seconds}s"


def _trim(number: Decimal) -> str:
	text = format(number, "f")
	if "." in text:
		text = text.rstrip("0").rstrip(".")
	return text


def parse_datetime(text: str) -> datetime:
	"""
	Parse an RFC 3339 timestamp, e.g. ``"2024-03-01T12:30:00Z"``.

	The offset is mandatory (``Z``/``z`` or ``+hh:mm``); a space separator is
	accepted in place of ``T``. Fractional seconds of any precision are read
	and truncated to microseconds.

	:param text: Timestamp text.
	:return: Aware :class:`datetime`.
	:raises ValueError: On malformed input or out-of-range fields.
	"""
	match = _RFC3339.fullmatch(text)
	if match is None:
		raise ValueError(f"invalid datetime {text!r}, expected RFC 3339")
	year, month, day, hour, minute, second, fraction, offset = match.groups()
	micros = int((fraction or "")[:6].ljust(6, "0"))
	try:
		if offset in ("Z", "z"):
			tz = timezone.utc
		else:
			delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
			tz = timezone(-delta if offset[0] == "-" else delta)
		return datetime(
			int(year), int(month), int(day),
			int(hour), int(minute), int(second), micros,
			tzinfo=tz
		)
	except ValueError as exc:
		raise ValueError(f"invalid datetime {text!r}: {exc}") from exc


def parse_date(text: str) -> date:
	"""
	Parse a calendar date in ``YYYY-MM-DD`` form.

	:param text: Date text.
	:return: Parsed :class:`date`.
	:raises ValueError: On malformed input.
	"""
	if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", text):
		raise ValueError(f"invalid date {text!r}, expected YYYY-MM-DD")
	return date.fromisoformat(text)


def parse_unix(text: str) -> UnixTime:
	"""
	Parse whole seconds since the unix epoch.

	:param text: Integer text, optionally signed.
	:return: :class:`UnixTime` in UTC.
	:raises ValueError: On non-integer input.
	"""
	if not re.fullmatch(r"[+-]?\d+", text):
		raise ValueError(f"invalid unix time {text!r}")
	try:
		return UnixTime.from_seconds(int(text))
	except (OverflowError, OSError) as exc:
		raise ValueError(f"unix time {text!r} out of range") from exc


def format_temporal(value: Union[timedelta, datetime, date]) -> str:
	"""
	Text form of a temporal value, the inverse of the ``parse_*`` functions.

	:param value: Duration, datetime, :class:`UnixTime` or date.
	:return: Text accepted by the matching parser.
	"""
	if isinstance(value, timedelta):
		return format_duration(value)
	if isinstance(value, UnixTime):
		return value.to_text()
	if isinstance(value, datetime):
		text = value.isoformat()
		return text[:-6] + "Z" if text.endswith("+00:00") else text
	return value.isoformat()


__all__ = [
	"UnixTime",
	"parse_duration",
	"format_duration",
	"parse_datetime",
	"parse_date",
	"parse_unix",
	"format_temporal",
]
