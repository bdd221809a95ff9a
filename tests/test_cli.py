from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

import cli.doctor as cli_doctor
import cli.main as cli_main
from conftest import ATTRIBUTES_TSV, FILTERS_TSV, QUERY_TSV, REGISTRY_XML, FakeTransport, ok
from core.interfaces.transport import TransportReply
from core.services.mart_client import MartClient

runner = CliRunner()


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(cli_main, "open_mart_client", lambda settings=None: MartClient(fake))
    return fake


def test_query_show_xml_does_not_hit_the_network(transport):
    result = runner.invoke(
        cli_main.app,
        ["query", "-d", "hsapiens_gene_ensembl", "-a", "entrezgene_id", "-f", "chromosome_name=21,22",
         "--exclude", "with_hgnc", "--limit", "5", "--show-xml"],
    )

    assert result.exit_code == 0, result.output
    assert '<Filter name="chromosome_name" value="21,22"/>' in result.output
    assert '<Filter name="with_hgnc" excluded="1"/>' in result.output
    assert 'count="5"' in result.output
    assert transport.calls == []


def test_query_runs_and_exports_json(transport, tmp_path):
    transport.replies.append(ok(QUERY_TSV))
    out = tmp_path / "out" / "result.json"

    result = runner.invoke(
        cli_main.app,
        ["query", "-d", "hsapiens_gene_ensembl", "-a", "affy_hg_u133_plus_2", "-a", "entrezgene_id",
         "--json-output", str(out)],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["header"] == ["AFFY HG U133 Plus 2 probe", "NCBI gene ID"]
    assert payload["records"][0] == ["209310_s_at", "837"]
    assert payload["dataset"] == "hsapiens_gene_ensembl"
    assert len(transport.calls) == 1


def test_query_rejects_malformed_filter(transport):
    result = runner.invoke(cli_main.app, ["query", "-d", "d", "-f", "no-equals-sign"])
    assert result.exit_code != 0
    assert transport.calls == []


def test_marts_lists_registry(transport):
    transport.replies.append(ok(REGISTRY_XML.replace("ENSEMBL_MART_ENSEMBL", "ENSEMBL")))

    result = runner.invoke(cli_main.app, ["marts"])

    assert result.exit_code == 0, result.output
    assert "ENSEMBL" in result.output


def test_filters_and_attributes_commands(transport):
    transport.replies.extend([ok(FILTERS_TSV), ok(ATTRIBUTES_TSV)])

    filters = runner.invoke(cli_main.app, ["filters", "ENSEMBL_MART_ENSEMBL", "hsapiens_gene_ensembl"])
    attributes = runner.invoke(cli_main.app, ["attributes", "ENSEMBL_MART_ENSEMBL", "hsapiens_gene_ensembl"])

    assert filters.exit_code == 0, filters.output
    assert "Filters (2)" in filters.output
    assert attributes.exit_code == 0, attributes.output
    assert "Attributes (2)" in attributes.output


def test_server_error_exits_with_code_one(transport):
    transport.replies.append(TransportReply(status_code=500, text=""))

    result = runner.invoke(cli_main.app, ["datasets", "ENSEMBL_MART_ENSEMBL"])

    assert result.exit_code == 1
    assert transport.calls == [[("mart", "ENSEMBL_MART_ENSEMBL"), ("type", "datasets"), ("requestid", "martclient")]]


def test_server_option_reaches_every_command(monkeypatch):
    seen = []

    def _open(settings=None):
        seen.append(settings.server_url)
        return MartClient(FakeTransport(ok(REGISTRY_XML)))

    monkeypatch.setattr(cli_main, "open_mart_client", _open)
    monkeypatch.setattr(cli_doctor, "open_mart_client", _open)
    mirror = "http://plants.ensembl.org/biomart/martservice"

    assert runner.invoke(cli_main.app, ["--server", mirror, "marts"]).exit_code == 0
    result = runner.invoke(cli_main.app, ["--server", mirror, "doctor", "run"])
    assert result.exit_code == 0, result.output
    assert seen == [mirror, mirror]

    # Without the flag the next invocation falls back to the default again.
    assert runner.invoke(cli_main.app, ["marts"]).exit_code == 0
    assert seen[-1] == "http://www.ensembl.org/biomart/martservice"
