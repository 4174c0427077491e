from __future__ import annotations

from app.storage.base import EntityKind
from etl.processors import nr04_processor
from etl.processors.motivos_processor import process_motivos_csv
from etl.processors.municipios_processor import process_municipios_csv
from etl.processors.nr04_processor import parse_risk_levels, process_nr04_pdf
from tests.common import csv_text

NR04_LINES = [
    "ANEXO I",
    "Codigo Denominacao Grau de risco",
    "01.11-3 Cultivo de cereais 3",
    "41.20-4 Construcao de edificios 3",
    "85.99-6 Atividades de ensino nao especificadas anteriormente 2",
    "Pagina 12",
]


def test_status_reasons_are_loaded_and_trimmed(tmp_path, memory_storage):
    path = tmp_path / "F.K03200$Z.D30610.MOTICSV"
    path.write_text(
        csv_text([["00", "SEM MOTIVO"], ["01", " EXTINCAO POR ENCERRAMENTO LIQUIDACAO VOLUNTARIA "], ["XX", "INVALIDO"]]),
        encoding="latin1",
    )

    assert process_motivos_csv(path, memory_storage) == 2
    assert memory_storage.find_by_key(EntityKind.STATUS_REASON, 1).record["motivo"] == (
        "EXTINCAO POR ENCERRAMENTO LIQUIDACAO VOLUNTARIA"
    )
    assert memory_storage.count(EntityKind.STATUS_REASON) == 2


def test_cities_are_loaded_with_latin1_names(tmp_path, sqlite_storage):
    path = tmp_path / "F.K03200$Z.D30610.MUNICCSV"
    path.write_text(csv_text([["7107", "SAO PAULO"], ["0001", "GUAJARÁ-MIRIM"]]), encoding="latin1")

    assert process_municipios_csv(path, sqlite_storage) == 2
    assert sqlite_storage.find_by_key(EntityKind.CITY, 1).record["nome_municipio"] == "GUAJARÁ-MIRIM"


def test_parse_risk_levels_keys_by_five_digit_group():
    assert list(parse_risk_levels(NR04_LINES)) == [("01113", "3"), ("41204", "3"), ("85996", "2")]


def test_nr04_pdf_is_loaded_line_by_line(tmp_path, memory_storage, monkeypatch):
    monkeypatch.setattr(nr04_processor, "extract_pdf_lines", lambda path: NR04_LINES)

    assert process_nr04_pdf(tmp_path / "nr04.pdf", memory_storage) == 3
    assert memory_storage.find_by_key(EntityKind.RISK_LEVEL, "41204").record["grau_risco"] == "3"
