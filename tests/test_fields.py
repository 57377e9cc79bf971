# tests/test_fields.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from fieldargs.errors import TargetError
from fieldargs.fields import Display, FieldDescriptor, describe_fields, option
from fieldargs.kinds import Kind


@dataclass
class Settings:
	listen: str = option(arg="listen", env="LISTEN", default=":8080", usage="address to listen on")
	password: str = option(env="PASSWORD", required=True, display="length")
	names: List[str] = option(arg="names", separator=";", initial_factory=list)
	amount: Optional[float] = option(arg="amount")
	plain: str = "untouched"
	raw: int = field(default=0, metadata={"env": "RAW", "required": "true", "display": "hidden"})
	_secret: str = option(env="SECRET")


def test_describe_fields_returns_sourced_fields_in_order():
	descriptors = describe_fields(Settings())
	assert [d.name for d in descriptors] == ["listen", "password", "names", "amount", "raw"]

	listen = descriptors[0]
	assert listen == FieldDescriptor(
		name="listen",
		semantic=listen.semantic,
		arg="listen",
		env="LISTEN",
		default=":8080",
		usage="address to listen on",
	)
	assert listen.semantic.kind is Kind.TEXT
	assert listen.sources() == ["parameter listen", "env LISTEN"]


def test_describe_fields_reads_metadata_and_annotations():
	by_name = {d.name: d for d in describe_fields(Settings())}

	assert by_name["password"].required
	assert by_name["password"].display is Display.LENGTH
	assert by_name["names"].separator == ";"
	assert by_name["names"].semantic.kind is Kind.LIST
	assert by_name["amount"].semantic.optional
	assert by_name["amount"].default is None


def test_raw_metadata_is_accepted_like_option():
	raw = {d.name: d for d in describe_fields(Settings())}["raw"]
	assert raw.required
	assert raw.display is Display.HIDDEN
	assert raw.env == "RAW"
	assert raw.semantic.kind is Kind.INT


def test_include_bare_keeps_fields_without_sources_but_never_private_ones():
	names = [d.name for d in describe_fields(Settings(), include_bare=True)]
	assert "plain" in names
	assert "_secret" not in names


@pytest.mark.parametrize("target", [Settings, {"listen": "x"}, object(), None])
def test_describe_fields_requires_dataclass_instance(target):
	with pytest.raises(TargetError, match="dataclass instance"):
		describe_fields(target)


def test_option_validates_metadata():
	with pytest.raises(ValueError, match="unknown display"):
		option(display="secret")
	with pytest.raises(ValueError, match="default must be a string"):
		option(default=8080)
	with pytest.raises(ValueError, match="without dashes"):
		option(arg="--port")
	with pytest.raises(ValueError, match="separator"):
		option(separator="")


def test_option_initial_values():
	@dataclass
	class Target:
		port: int = option(arg="port", initial=80)
		tags: List[str] = option(arg="tags", initial_factory=lambda: ["a"])

	target = Target()
	assert target.port == 80
	assert target.tags == ["a"]
	assert Target().tags is not target.tags


def test_display_accepts_string_names():
	assert Display.coerce("HIDDEN") is Display.HIDDEN
	assert Display.coerce(None) is Display.NORMAL
	assert Display.coerce(Display.LENGTH) is Display.LENGTH
