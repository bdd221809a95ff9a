from __future__ import annotations

from typing import Annotated

import pytest
from pydantic import BaseModel

from core.domain.decoders import (
    IntBool,
    boolean_from_integer,
    bracket_trimmed_list,
    comma_separated_list,
    default_on_decode_failure,
    filter_kind_or_unknown,
)
from core.domain.filter_kind import FilterKind


@pytest.mark.parametrize(("raw", "expected"), [("0", False), ("1", True), (0, False), (1, True)])
def test_boolean_from_integer_accepts_zero_and_one(raw, expected):
    assert boolean_from_integer(raw) is expected


@pytest.mark.parametrize("raw", ["2", "true", "", "01x", 7, " 1", "1 ", " 0\n"])
def test_boolean_from_integer_is_strict(raw):
    with pytest.raises(ValueError):
        boolean_from_integer(raw)


def test_comma_separated_list():
    assert comma_separated_list("") == []
    assert comma_separated_list("a") == ["a"]
    assert comma_separated_list("html,txt,csv") == ["html", "txt", "csv"]
    assert comma_separated_list(["x", "y"]) == ["x", "y"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("[foo]", ["foo"]),
        ("", []),
        ("[]", []),
        (["[a", "b]"], ["a", "b"]),
        ("[a,b,c]", ["a", "b", "c"]),
        ("[[x]]", ["x"]),
        ("[[a,b]]", ["[a", "b]"]),
        ("[a,[b],c]", ["a", "[b]", "c"]),
        ("a,b", ["a", "b"]),
    ],
)
def test_bracket_trimmed_list_trims_only_the_edges(raw, expected):
    assert bracket_trimmed_list(raw) == expected


def test_filter_kind_or_unknown():
    assert filter_kind_or_unknown("id_list") is FilterKind.ID_LIST
    assert filter_kind_or_unknown("Boolean_List") is FilterKind.BOOLEAN_LIST
    assert filter_kind_or_unknown("range") is FilterKind.UNKNOWN
    assert FilterKind("whatever") is FilterKind.UNKNOWN


class _Flags(BaseModel):
    strict: IntBool = False
    lenient: Annotated[IntBool, default_on_decode_failure(True)] = True
    names: Annotated[list[str], default_on_decode_failure(list)] = []


def test_default_on_decode_failure_substitutes_default():
    flags = _Flags.model_validate({"lenient": "yes", "names": 42})
    assert flags.lenient is True
    assert flags.names == []

    assert _Flags.model_validate({"lenient": "0"}).lenient is False


def test_strict_field_still_fails():
    with pytest.raises(ValueError):
        _Flags.model_validate({"strict": "yes"})
