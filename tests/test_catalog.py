from __future__ import annotations

import pytest

from app.core.exceptions import CatalogError
from etl.catalog import HtmlCatalogResolver, parse_catalog_page
from tests.common import FakeHttp, FakeResponse

PAGE_URL = "https://dadosabertos.rfb.gov.br/CNPJ/"

PAGE = """
<html><body>
  <p>Data da ultima extracao: 14/10/2023</p>
  <table>
    <tr><td><a href="Empresas0.zip">Empresas0.zip</a></td></tr>
    <tr><td><a href="Empresas1.zip">Empresas1.zip</a></td></tr>
    <tr><td><a href="Estabelecimentos0.zip">Estabelecimentos0.zip</a></td></tr>
    <tr><td><a href="Motivos.zip">Motivos.zip</a></td></tr>
    <tr><td><a href="Municipios.zip">Municipios.zip</a></td></tr>
    <tr><td><a href="Socios0.zip">Socios0.zip</a></td></tr>
    <tr><td><a href="LAYOUT_DADOS_ABERTOS_CNPJ.pdf">Layout</a></td></tr>
  </table>
</body></html>
"""


def test_parse_catalog_page():
    snapshot = parse_catalog_page(PAGE, base_url=PAGE_URL)

    assert snapshot.data_files == [
        PAGE_URL + "Empresas0.zip",
        PAGE_URL + "Empresas1.zip",
        PAGE_URL + "Estabelecimentos0.zip",
    ]
    assert snapshot.status_file == PAGE_URL + "Motivos.zip"
    assert snapshot.cities_file == PAGE_URL + "Municipios.zip"
    assert snapshot.last_updated == "14/10/2023"


def test_resolver_fetches_the_page():
    http = FakeHttp(gets={PAGE_URL: FakeResponse(200, text=PAGE)})

    snapshot = HtmlCatalogResolver(PAGE_URL, http=http).resolve()

    assert len(snapshot.data_files) == 3


def test_resolver_failure_is_a_catalog_error():
    http = FakeHttp()

    with pytest.raises(CatalogError):
        HtmlCatalogResolver(PAGE_URL, http=http).resolve()


@pytest.mark.parametrize(
    "marker",
    [
        "<div>Data da ultima extracao: 14/10/2023</div>",
        "<h3>Data de atualizacao: 14/10/2023</h3>",
        "<div><strong>Data da ultima extracao:</strong> 14/10/2023</div>",
    ],
)
def test_update_marker_is_found_outside_paragraphs(marker):
    page = f'<html><body>{marker}<a href="Empresas0.zip">Empresas0.zip</a></body></html>'

    assert parse_catalog_page(page, base_url=PAGE_URL).last_updated == "14/10/2023"


def test_missing_update_marker_is_empty():
    assert parse_catalog_page('<a href="Empresas0.zip">x</a>', base_url=PAGE_URL).last_updated == ""
