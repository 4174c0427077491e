from __future__ import annotations

from datetime import datetime

import pytest

from app.core.exceptions import FreshnessError
from app.storage.base import EntityKind
from etl.freshness import CHECKPOINT_KEY, FreshnessGate


@pytest.fixture()
def gate(memory_storage):
    return FreshnessGate(memory_storage)


def _checkpoint(storage, value: datetime) -> None:
    storage.upsert(EntityKind.PARAMETER, CHECKPOINT_KEY, {"valor": value.isoformat()})


def test_runs_when_no_checkpoint(gate):
    assert gate.read_checkpoint() is None
    assert gate.should_run("31/12/2020") is True


def test_skips_when_catalog_is_older(gate, memory_storage):
    _checkpoint(memory_storage, datetime(2021, 1, 1))
    assert gate.should_run("31/12/2020") is False


def test_skips_when_catalog_equals_checkpoint(gate, memory_storage):
    _checkpoint(memory_storage, datetime(2021, 1, 1))
    assert gate.should_run("01/01/2021") is False


def test_runs_when_catalog_is_newer(gate, memory_storage):
    _checkpoint(memory_storage, datetime(2021, 1, 1))
    assert gate.should_run("02/01/2021") is True


def test_force_ignores_checkpoint(gate, memory_storage):
    _checkpoint(memory_storage, datetime(2021, 1, 1))
    assert gate.should_run("31/12/2020", force=True) is True


@pytest.mark.parametrize("value", ["2021-01-01", "", "32/01/2021"])
def test_unparseable_catalog_date_is_fatal(gate, value):
    with pytest.raises(FreshnessError):
        gate.should_run(value)
    with pytest.raises(FreshnessError):
        gate.should_run(value, force=True)


def test_advance_persists_checkpoint(gate, memory_storage):
    gate.advance("15/06/2023")

    assert gate.read_checkpoint() == datetime(2023, 6, 15)
    assert gate.should_run("15/06/2023") is False
    assert gate.should_run("16/06/2023") is True
