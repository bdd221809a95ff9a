from __future__ import annotations

import pytest

from conftest import QUERY_TSV
from core.domain.response import Response


def test_header_and_records():
    response = Response("AFFY HG U133 Plus 2 probe\tNCBI gene ID\n209310_s_at\t837\n")

    assert response.header() == ["AFFY HG U133 Plus 2 probe", "NCBI gene ID"]
    assert response.records() == [["209310_s_at", "837"]]
    assert len(response) == 1


def test_views_are_recomputed_from_raw():
    response = Response(QUERY_TSV)

    assert response.records() == response.records()
    assert response.records() is not response.records()
    assert response.raw == QUERY_TSV


def test_as_dicts():
    rows = Response(QUERY_TSV).as_dicts()
    assert rows[0] == {"AFFY HG U133 Plus 2 probe": "209310_s_at", "NCBI gene ID": "837"}
    assert len(rows) == 3


def test_headerless_response():
    response = Response("a\t1\nb\t2\n", has_header=False)

    assert response.header() == []
    assert response.records() == [["a", "1"], ["b", "2"]]
    with pytest.raises(ValueError):
        response.as_dicts()


def test_empty_body():
    response = Response("")
    assert response.header() == []
    assert response.records() == []


def test_quotes_are_not_interpreted():
    response = Response('name\tnote\nx\t"quoted" text\n')
    assert response.records() == [["x", '"quoted" text']]


def test_long_sequence_field_is_not_truncated():
    sequence = "ACGT" * 40000
    response = Response(f"Exon region sequence\tGene stable ID\n{sequence}\tENSG00000160791\n")

    assert response.records() == [[sequence, "ENSG00000160791"]]
    assert response.as_dicts()[0]["Exon region sequence"] == sequence


def test_comma_delimited_response():
    response = Response("a,b\n1,2\n", delimiter=",")

    assert response.header() == ["a", "b"]
    assert response.records() == [["1", "2"]]


def test_empty_delimiter_is_rejected():
    with pytest.raises(ValueError):
        Response("a\n", delimiter="")
