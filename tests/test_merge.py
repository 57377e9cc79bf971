# tests/test_merge.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, NewType, Optional

import pytest

from fieldargs.errors import FillError
from fieldargs.fields import option
from fieldargs.kinds import Int32
from fieldargs.merge import fill, merge_values
from fieldargs.timeparse import UnixTime


class Username(str):
	pass


Label = NewType("Label", str)


class Broker:
	def __init__(self, url: str) -> None:
		self.url = url

	@classmethod
	def from_text(cls, text):
		if "://" not in text:
			text = "plain://" + text
		return cls(text)

	def to_text(self) -> str:
		return self.url


class Names(List[str]):
	pass


@dataclass
class Target:
	username: Username = option(arg="username")
	label: Label = option(env="LABEL")
	workers: Int32 = option(default="1")
	ratio: float = option(default="0.5")
	amount: Optional[float] = option(arg="amount")
	users: List[Username] = option(arg="users", initial_factory=list)
	names: Names = option(arg="names", initial_factory=Names)
	broker: Optional[Broker] = option(env="BROKER")
	wait: timedelta = option(default="1s")
	seen: Optional[UnixTime] = option(env="SEEN")
	untouched: str = "keep"
	_hidden: str = ""


def test_merge_values_later_maps_win():
	merged = merge_values({"a": 1, "b": 1}, None, {"b": 2}, {"c": 3})
	assert merged == {"a": 1, "b": 2, "c": 3}


def test_fill_assigns_present_keys_only():
	target = Target()
	fill(target, {"workers": 8, "ratio": 2, "wait": timedelta(minutes=5)})
	assert target.workers == 8
	assert type(target.workers) is Int32
	assert target.ratio == 2.0
	assert isinstance(target.ratio, float)
	assert target.wait == timedelta(minutes=5)
	assert target.untouched == "keep"
	assert target.username is None


def test_fill_rebuilds_named_scalars_and_list_elements():
	target = fill(Target(), {"username": "ben", "label": "blue", "users": ["alice", "bob"]})
	assert type(target.username) is Username
	assert target.label == "blue"
	assert [type(user) for user in target.users] == [Username, Username]


def test_fill_rebuilds_list_subclass():
	target = fill(Target(), {"names": ["a", "b"]})
	assert isinstance(target.names, Names)
	assert target.names == ["a", "b"]


def test_fill_redecodes_text_encoded_values():
	source = Broker("localhost:9092")
	target = fill(Target(), {"broker": source})
	assert target.broker is not source
	assert target.broker.url == "plain://localhost:9092"


def test_fill_accepts_text_for_typed_fields():
	target = fill(Target(), {"workers": "3", "wait": "2m", "broker": "https://b"})
	assert target.workers == 3
	assert target.wait == timedelta(minutes=2)
	assert target.broker.url == "https://b"


def test_fill_converts_datetime_to_unix_time():
	moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
	target = fill(Target(), {"seen": moment})
	assert isinstance(target.seen, UnixTime)
	assert target.seen == moment


def test_fill_allows_none_only_for_optional_fields():
	target = fill(Target(), {"amount": None})
	assert target.amount is None
	with pytest.raises(FillError, match="fill field workers"):
		fill(Target(), {"workers": None})


@pytest.mark.parametrize(
	"values, match",
	[
		({"nope": 1}, "no configurable field 'nope'"),
		({"_hidden": "x"}, "no configurable field '_hidden'"),
		({"workers": 2 ** 40}, "out of range"),
		({"workers": True}, "cannot use bool"),
		({"users": "alice"}, "cannot use str"),
		({"wait": 5}, "fill field wait"),
		({"workers": "many"}, "invalid syntax"),
	],
)
def test_fill_rejects_unknown_keys_and_unconvertible_values(values, match):
	with pytest.raises(FillError, match=match):
		fill(Target(), values)


@dataclass(frozen=True)
class Frozen:
	port: int = option(default="1")


def test_fill_reports_frozen_targets():
	with pytest.raises(FillError, match="cannot assign field port"):
		fill(Frozen(), {"port": 2})


@dataclass
class Plain:
	values: List[int] = field(default_factory=list)


def test_fill_works_on_fields_without_sources():
	target = fill(Plain(), {"values": ["1", 2]})
	assert target.values == [1, 2]
