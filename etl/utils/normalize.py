from __future__ import annotations

import re
from datetime import datetime

DATE_LAYOUT = "%Y%m%d"

_INTEGER = re.compile(r"[+-]?\d+")
_DATE = re.compile(r"\d{8}")

# CPF embedded by the registry in the name of individual entrepreneurs (MEI),
# with or without punctuation: 123.456.789-00 / 12345678900
CPF_PATTERN = re.compile(r"(\d{3}\.?\d{3}\.?\d{3}-?\d{2})")


def to_string(value: str) -> str:
    return value.strip()


def to_int(value: str) -> int | None:
    raw = value.strip()
    if not _INTEGER.fullmatch(raw):
        return None
    return int(raw, 10)


def to_decimal(value: str) -> float:
    # "067000000000,00" -> 67000000000.0
    try:
        return float(value.strip().replace(",", "."))
    except ValueError:
        return 0.0


def to_timestamp(value: str) -> datetime | None:
    raw = value.strip()
    if not _DATE.fullmatch(raw):
        return None
    try:
        return datetime.strptime(raw, DATE_LAYOUT)
    except ValueError:
        return None


def strip_cpf(name: str) -> str:
    return CPF_PATTERN.sub("", name).strip()


def split_activities(value: str) -> list[str]:
    return [code.strip() for code in value.split(",") if code.strip()]


def remove_chars(value: str, chars: str) -> str:
    return value.translate({ord(char): None for char in chars})


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value)
