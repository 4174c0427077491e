"""Schema-driven mapping of delimited rows into typed records.

The layout file lists, per record kind, which column feeds each target field
and how the raw text is converted. Conversions never raise: a bad integer or
date becomes ``None`` and a bad decimal becomes ``0.0``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import SchemaError
from etl.utils.normalize import to_decimal, to_int, to_string, to_timestamp


class RecordKind(str, Enum):
    BASE_COMPANY = "base_company"
    ESTABLISHMENT = "establishment"


class FieldType(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    TIMESTAMP = "timestamp"


CONVERTERS: dict[FieldType, Callable[[str], Any]] = {
    FieldType.STRING: to_string,
    FieldType.INT: to_int,
    FieldType.FLOAT: to_decimal,
    FieldType.TIMESTAMP: to_timestamp,
}

_KIND_PATTERNS: tuple[tuple[RecordKind, re.Pattern[str]], ...] = (
    (RecordKind.BASE_COMPANY, re.compile(r"EMPRE", re.IGNORECASE)),
    (RecordKind.ESTABLISHMENT, re.compile(r"ESTABELE", re.IGNORECASE)),
)

# Fields the document builders read, with the type they expect.
REQUIRED_FIELDS: dict[RecordKind, dict[str, FieldType]] = {
    RecordKind.BASE_COMPANY: {
        "cnpj_basico": FieldType.STRING,
        "razao_social": FieldType.STRING,
        "natureza_juridica": FieldType.INT,
        "qualificacao_responsavel": FieldType.INT,
        "capital_social": FieldType.FLOAT,
        "porte_empresa": FieldType.INT,
        "ente_federativo": FieldType.STRING,
    },
    RecordKind.ESTABLISHMENT: {
        "cnpj_basico": FieldType.STRING,
        "cnpj_ordem": FieldType.STRING,
        "cnpj_dv": FieldType.STRING,
        "matriz_filial": FieldType.INT,
        "nome_fantasia": FieldType.STRING,
        "situacao_cadastral": FieldType.INT,
        "data_situacao_cadastral": FieldType.TIMESTAMP,
        "codigo_motivo_situacao": FieldType.INT,
        "nome_cidade_exterior": FieldType.STRING,
        "codigo_pais": FieldType.INT,
        "data_inicio_atividade": FieldType.TIMESTAMP,
        "cnae_fiscal": FieldType.STRING,
        "cnaes_secundarios": FieldType.STRING,
        "tipo_logradouro": FieldType.STRING,
        "logradouro": FieldType.STRING,
        "numero": FieldType.STRING,
        "complemento": FieldType.STRING,
        "bairro": FieldType.STRING,
        "cep": FieldType.STRING,
        "uf": FieldType.STRING,
        "codigo_municipio": FieldType.INT,
        "ddd1": FieldType.STRING,
        "telefone1": FieldType.STRING,
        "ddd2": FieldType.STRING,
        "telefone2": FieldType.STRING,
        "ddd_fax": FieldType.STRING,
        "fax": FieldType.STRING,
        "email": FieldType.STRING,
        "situacao_especial": FieldType.STRING,
        "data_situacao_especial": FieldType.TIMESTAMP,
    },
}


class FieldSpec(BaseModel):
    field_type: FieldType = Field(default=FieldType.STRING, alias="type")
    position: int = Field(ge=0)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class RecordSchema(BaseModel):
    kind: RecordKind
    fields: dict[str, FieldSpec]

    model_config = ConfigDict(extra="forbid")

    @property
    def width(self) -> int:
        return max((spec.position for spec in self.fields.values()), default=-1) + 1


_LAYOUT = TypeAdapter(list[RecordSchema])


def _check_required_fields(schema: RecordSchema) -> None:
    for name, expected in REQUIRED_FIELDS[schema.kind].items():
        spec = schema.fields.get(name)
        if spec is None:
            raise SchemaError(f"Campo obrigatorio ausente no layout '{schema.kind.value}': {name}")
        if spec.field_type is not expected:
            raise SchemaError(
                f"Campo '{name}' do layout '{schema.kind.value}' deve ser do tipo "
                f"{expected.value}, encontrado {spec.field_type.value}"
            )


def parse_schema(raw: str | bytes) -> dict[RecordKind, RecordSchema]:
    try:
        layout = _LAYOUT.validate_json(raw)
    except PydanticValidationError as exc:
        raise SchemaError(f"Layout invalido: {exc}") from exc

    schemas: dict[RecordKind, RecordSchema] = {}
    for schema in layout:
        if schema.kind in schemas:
            raise SchemaError(f"Layout duplicado para '{schema.kind.value}'")
        _check_required_fields(schema)
        schemas[schema.kind] = schema
    return schemas


def load_schema(file_path: str | Path) -> dict[RecordKind, RecordSchema]:
    path = Path(file_path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise SchemaError(f"Arquivo de layout ilegivel: {path}") from exc
    return parse_schema(raw)


def kind_for_file(file_name: str) -> RecordKind | None:
    name = Path(file_name).name
    for kind, pattern in _KIND_PATTERNS:
        if pattern.search(name):
            return kind
    return None


@dataclass(frozen=True)
class MappedRow:
    kind: RecordKind
    values: Mapping[str, Any]
    types: Mapping[str, FieldType]

    def _get(self, name: str, expected: FieldType) -> Any:
        declared = self.types.get(name)
        if declared is None:
            raise SchemaError(f"Campo '{name}' nao existe no layout '{self.kind.value}'")
        if declared is not expected:
            raise SchemaError(f"Campo '{name}' e {declared.value}, nao {expected.value}")
        return self.values[name]

    def string(self, name: str) -> str:
        return self._get(name, FieldType.STRING)

    def integer(self, name: str) -> int | None:
        return self._get(name, FieldType.INT)

    def decimal(self, name: str) -> float:
        return self._get(name, FieldType.FLOAT)

    def timestamp(self, name: str) -> datetime | None:
        return self._get(name, FieldType.TIMESTAMP)


def map_row(row: Sequence[str], schema: RecordSchema) -> MappedRow:
    values: dict[str, Any] = {}
    types: dict[str, FieldType] = {}
    for name, spec in schema.fields.items():
        raw = row[spec.position] if spec.position < len(row) else ""
        values[name] = CONVERTERS[spec.field_type](raw if isinstance(raw, str) else "")
        types[name] = spec.field_type
    return MappedRow(kind=schema.kind, values=values, types=types)
