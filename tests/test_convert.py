# tests/test_convert.py

from datetime import date, timedelta
from typing import List, NewType, Optional

import pytest

from fieldargs.convert import convert_text, render_value, split_list
from fieldargs.errors import ParseFieldError, UnsupportedTypeError
from fieldargs.kinds import Int32, Kind, UInt32, classify
from fieldargs.timeparse import UnixTime


class Username(str):
	pass


class Port(int):
	pass


class Ratio(float):
	pass


Active = NewType("Active", bool)
Label = NewType("Label", str)


class Broker(str):
	@classmethod
	def from_text(cls, text):
		if not text:
			raise ValueError("broker cannot be empty")
		if "://" not in text:
			text = "plain://" + text
		return cls(text)


class Brokers(List[Broker]):
	@classmethod
	def from_text(cls, text):
		items = [Broker.from_text(part.strip()) for part in text.split(",") if part.strip()]
		if not items:
			raise ValueError("need at least one broker")
		return cls(items)


def convert(annotation, text, **kwargs):
	return convert_text(classify(annotation), text, field_name="Field", **kwargs)


# --- classification ---------------------------------------------------------
@pytest.mark.parametrize(
	"annotation, kind",
	[
		(str, Kind.TEXT),
		(bool, Kind.BOOL),
		(int, Kind.INT),
		(Int32, Kind.INT),
		(float, Kind.FLOAT),
		(timedelta, Kind.DURATION),
		(date, Kind.DATE),
		(UnixTime, Kind.UNIXTIME),
		(List[str], Kind.LIST),
		(Username, Kind.TEXT),
		(Active, Kind.BOOL),
		(Broker, Kind.CUSTOM),
		(Brokers, Kind.CUSTOM),
		(dict, Kind.UNSUPPORTED),
		(complex, Kind.UNSUPPORTED),
	],
)
def test_classify_maps_annotations_to_kinds(annotation, kind):
	assert classify(annotation).kind is kind


def test_classify_optional_and_named_flags():
	semantic = classify(Optional[float])
	assert semantic.kind is Kind.FLOAT
	assert semantic.optional
	assert not semantic.named

	named = classify(Port)
	assert named.named
	assert named.bounds == (-(2 ** 63), 2 ** 63 - 1)
	assert classify(UInt32).bounds == (0, 2 ** 32 - 1)


# --- primitives -------------------------------------------------------------
@pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
def test_bool_true_spellings(text):
	assert convert(bool, text) is True


@pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
def test_bool_false_spellings(text):
	assert convert(bool, text) is False


def test_bool_rejects_other_text():
	with pytest.raises(ParseFieldError, match="parse field Field as bool failed"):
		convert(bool, "yes")


def test_int_parsing_and_errors():
	assert convert(int, "-42") == -42
	assert convert(int, "+7") == 7
	with pytest.raises(ParseFieldError, match="invalid"):
		convert(int, "abc")
	with pytest.raises(ParseFieldError):
		convert(int, "1.5")
	with pytest.raises(ParseFieldError):
		convert(int, " 1")


def test_fixed_width_ints_enforce_bounds():
	assert convert(Int32, "2147483647") == 2147483647
	with pytest.raises(ParseFieldError, match="out of range"):
		convert(Int32, "2147483648")
	with pytest.raises(ParseFieldError, match="out of range"):
		convert(UInt32, "-1")
	with pytest.raises(ParseFieldError, match="out of range"):
		convert(int, str(2 ** 63))


def test_float_parsing():
	assert convert(float, "13.37") == pytest.approx(13.37)
	assert convert(float, "1e3") == 1000.0
	with pytest.raises(ParseFieldError, match="parse field Field as float failed"):
		convert(float, "ten")


def test_optional_maps_empty_text_to_none():
	assert convert(Optional[float], "") is None
	assert convert(Optional[int], "") is None
	assert convert(Optional[float], "2.5") == 2.5


def test_temporal_kinds():
	assert convert(timedelta, "1d2h30m") == timedelta(hours=26, minutes=30)
	assert convert(date, "2024-01-31") == date(2024, 1, 31)
	assert convert(UnixTime, "0").to_text() == "0"
	with pytest.raises(ParseFieldError, match="parse field Field as timedelta failed"):
		convert(timedelta, "soon")


# --- named scalars ----------------------------------------------------------
@pytest.mark.parametrize(
	"annotation, primitive, text",
	[
		(Username, str, "ben"),
		(Port, int, "8080"),
		(Ratio, float, "0.25"),
		(Active, bool, "true"),
		(Label, str, "blue"),
	],
)
def test_named_scalar_matches_primitive_parsing(annotation, primitive, text):
	named = convert(annotation, text)
	assert named == convert(primitive, text)
	if isinstance(annotation, type):
		assert type(named) is annotation


# --- lists ------------------------------------------------------------------
def test_list_trims_and_drops_empty_segments():
	assert convert(List[str], "alice, bob,, charlie ") == ["alice", "bob", "charlie"]
	assert convert(List[str], "") == []
	assert convert(List[int], "1;2;3", separator=";") == [1, 2, 3]


def test_list_of_named_elements():
	values = convert(List[Username], "alice,bob")
	assert values == ["alice", "bob"]
	assert all(type(value) is Username for value in values)


def test_list_element_error_names_index():
	with pytest.raises(ParseFieldError, match=r"Field\[1\].*invalid"):
		convert(List[int], "1,abc")


def test_split_list_blank():
	assert split_list("   ") == []


# --- custom hooks -----------------------------------------------------------
def test_custom_decoder_adds_default_scheme():
	value = convert(Broker, "localhost:9092")
	assert value == "plain://localhost:9092"
	assert isinstance(value, Broker)
	assert convert(Broker, "https://example.com") == "https://example.com"


def test_custom_decoder_failure_is_reported_verbatim():
	with pytest.raises(ParseFieldError, match="broker cannot be empty"):
		convert(Broker, "")


def test_custom_list_container_decodes_itself():
	value = convert(Brokers, "a:1, b:2")
	assert isinstance(value, Brokers)
	assert value == ["plain://a:1", "plain://b:2"]
	with pytest.raises(ParseFieldError, match="need at least one broker"):
		convert(Brokers, " , ")


def test_list_of_custom_elements_uses_element_hook():
	assert convert(List[Broker], "a:1,https://b") == ["plain://a:1", "https://b"]


def test_unsupported_type_names_field_and_type():
	with pytest.raises(UnsupportedTypeError, match="field Field with type dict is unsupported"):
		convert(dict, "{}")


# --- rendering --------------------------------------------------------------
@pytest.mark.parametrize(
	"value, expected",
	[
		(True, "true"),
		(False, "false"),
		(timedelta(hours=26, minutes=30), "26h30m0s"),
		(date(2024, 1, 2), "2024-01-02"),
		(13.37, "13.37"),
		(Username("ben"), "ben"),
	],
)
def test_render_value(value, expected):
	assert render_value(value) == expected
