"""Shared fixtures: canned martservice payloads and an in-memory transport."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from core.interfaces.transport import TransportReply

REGISTRY_XML = """<MartRegistry>
    <MartURLLocation database="ensembl_mart_99" default="1" displayName="Ensembl Genes 99" host="www.ensembl.org" includeDatasets="" martUser="" name="ENSEMBL_MART_ENSEMBL" path="/biomart/martservice" port="80" serverVirtualSchema="default" visible="1" />
</MartRegistry>"""

DATASETS_TSV = (
    "\n"
    "TableSet\thsapiens_gene_ensembl\tHuman genes (GRCh38.p13)\t1\tGRCh38.p13\t200\t50000\tdefault\t2020-01-17 17:27:31\n"
    "TableSet\tmmusculus_gene_ensembl\tMouse genes (GRCm38.p6)\t1\tGRCm38.p6\t200\t50000\tdefault\t2020-01-17 17:30:02\n"
)

FILTERS_TSV = (
    "chromosome_name\tChromosome/scaffold name\t[1,2,3,X,Y]\t\tfilters\tlist\t=\thsapiens_gene_ensembl__gene__main\tname_1059\n"
    "with_hgnc\tWith HGNC Symbol ID(s)\t[only,excluded]\t\tfilters\tboolean_list\tonly,excluded\thsapiens_gene_ensembl__ox_hgnc__dm\tdbprimary_acc_1074\n"
)

ATTRIBUTES_TSV = (
    "ensembl_gene_id\tGene stable ID\tStable ID of the Gene\tfeature_page\thtml,txt,csv,tsv,xls\thsapiens_gene_ensembl__gene__main\tstable_id_1023\n"
    "entrezgene_id\tNCBI gene ID\tNCBI gene ID\tfeature_page\thtml,txt,csv,tsv,xls\thsapiens_gene_ensembl__ox_entrezgene__dm\tdbprimary_acc_1074\n"
)

QUERY_TSV = (
    "AFFY HG U133 Plus 2 probe\tNCBI gene ID\n"
    "209310_s_at\t837\n"
    "207500_at\t838\n"
    "202763_at\t836\n"
)


class FakeTransport:
    """Records every parameter list and answers from a queue of replies."""

    def __init__(self, *replies: TransportReply) -> None:
        self.replies = list(replies)
        self.calls: list[list[tuple[str, str]]] = []
        self.closed = False

    def send(self, params: Sequence[tuple[str, str]]) -> TransportReply:
        self.calls.append(list(params))
        return self.replies.pop(0)

    def close(self) -> None:
        self.closed = True


def ok(text: str) -> TransportReply:
    return TransportReply(status_code=200, text=text)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep user/project `.env` files and MARTCLIENT_* variables out of tests."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in ("MARTCLIENT_SERVER_URL", "MARTCLIENT_HTTP_TIMEOUT_SECONDS", "MARTCLIENT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
