"""Import and export of plan configuration documents (JSON/YAML)."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from moneyflow.core.currency import in_amount_range, parse_number
from moneyflow.core.errors import ConfigError, MalformedImportError
from moneyflow.core.models import PlanConfig

__all__ = [
    "COLLECTION_KEYS",
    "SAMPLE_DOCUMENT",
    "apply_import",
    "dumps_config",
    "load_config",
    "loads_config",
    "parse_document",
    "save_config",
]

logger = logging.getLogger(__name__)

COLLECTION_KEYS = ("incomes", "bills", "loans", "goals")

SAMPLE_DOCUMENT: dict[str, Any] = {
    "incomes": [
        {"id": "i1", "name": "Зарплата", "amount": 420000, "day": 15},
        {"id": "i2", "name": "Аванс", "amount": 200000, "day": 1},
    ],
    "bills": [
        {"id": "b1", "name": "Аренда", "amount": 180000, "day": 25, "priority": 10},
        {"id": "b2", "name": "Коммуналка", "amount": 25000, "day": 20, "priority": 9},
        {"id": "b3", "name": "Интернет", "amount": 6000, "day": 10, "priority": 8},
        {"id": "b4", "name": "Подписки", "amount": 3000, "day": 12, "priority": 5},
    ],
    "loans": [
        {
            "id": "l1",
            "name": "Кредит карта",
            "balance": 350000,
            "apr": 34.9,
            "minPayment": 20000,
            "day": 27,
        },
        {
            "id": "l2",
            "name": "Потреб кредит",
            "balance": 900000,
            "apr": 21.0,
            "minPayment": 35000,
            "day": 5,
        },
    ],
    "goals": [
        {"id": "g1", "name": "Подушка", "target": 1000000, "monthly": 50000},
        {"id": "g2", "name": "Отпуск", "target": 800000, "monthly": 70000},
    ],
    "startBalance": 50000,
}


def parse_document(
    text: str, *, format: str = "json", source: str = "<text>"
) -> dict[str, Any]:
    """
    Parse a configuration document and check its structure.

    Only the shape is checked here: the root must be a mapping and every
    collection that is present must be a list of mappings. Values inside
    the items are normalized later by PlanConfig.from_dict.

    Raises:
        MalformedImportError: If the text is not well-formed JSON/YAML or the
            structure is wrong
    """
    fmt = format.lower()
    if fmt not in {"json", "yaml", "yml"}:
        raise MalformedImportError(f"Unsupported document format '{format}'", source)

    try:
        if fmt == "json":
            data = json.loads(text, parse_float=Decimal)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise MalformedImportError(f"Could not parse document: {exc}", source) from exc

    if not isinstance(data, dict):
        raise MalformedImportError(
            f"Document root must be a mapping, got {type(data).__name__}", source
        )

    for key in COLLECTION_KEYS:
        items = data.get(key)
        if items is None:
            continue
        if not isinstance(items, list):
            raise MalformedImportError(f"'{key}' must be a list", source)
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                raise MalformedImportError(f"{key}[{idx}] must be a mapping", source)
    return data


def loads_config(
    text: str,
    *,
    format: str = "json",
    source: str = "<text>",
    notes: list[str] | None = None,
) -> PlanConfig:
    """Parse a complete configuration from document text."""
    data = parse_document(text, format=format, source=source)
    try:
        return PlanConfig.from_dict(data, notes=notes)
    except ConfigError as exc:
        raise MalformedImportError(str(exc), source) from exc


def load_config(
    path: str | Path, *, format: str | None = None, notes: list[str] | None = None
) -> PlanConfig:
    """
    Load a configuration from a JSON or YAML file.

    The format is taken from the file suffix unless given explicitly.

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedImportError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    fmt = (format or path.suffix.lstrip(".") or "json").lower()
    text = path.read_text(encoding="utf-8")
    return loads_config(text, format=fmt, source=str(path), notes=notes)


def dumps_config(config: PlanConfig, *, format: str = "json") -> str:
    """Serialize a configuration to document text."""
    document = config.to_document()
    if format.lower() in {"yaml", "yml"}:
        return yaml.safe_dump(document, allow_unicode=True, sort_keys=False)
    return json.dumps(document, indent=2, ensure_ascii=False)


def save_config(
    config: PlanConfig, path: str | Path, *, format: str | None = None
) -> None:
    """Save a configuration to a JSON or YAML file."""
    path = Path(path)
    fmt = format or path.suffix.lstrip(".") or "json"
    path.write_text(dumps_config(config, format=fmt) + "\n", encoding="utf-8")


def apply_import(
    current: PlanConfig,
    text: str,
    *,
    format: str = "json",
    source: str = "<text>",
) -> PlanConfig:
    """
    Merge an imported document into the current configuration.

    Collections present in the document replace the current ones, absent
    collections are kept. `startBalance` is only taken when it is a number.
    `strategy` is taken when present. The merge is all-or-nothing: the
    whole document is validated before anything is replaced, and `current`
    itself is never modified (a new PlanConfig is returned).

    Raises:
        MalformedImportError: If the document is malformed; `current` stays
            as it was
    """
    data = parse_document(text, format=format, source=source)

    partial = {
        key: deepcopy(data[key]) for key in COLLECTION_KEYS if data.get(key) is not None
    }
    if data.get("strategy") is not None:
        partial["strategy"] = data["strategy"]
    try:
        imported = PlanConfig.from_dict(partial)
    except ConfigError as exc:
        raise MalformedImportError(str(exc), source) from exc

    changes: dict[str, Any] = {key: getattr(imported, key) for key in partial}

    start = data.get("startBalance")
    is_number = isinstance(start, (int, float, Decimal)) and not isinstance(start, bool)
    parsed = parse_number(start) if is_number else None
    if parsed is not None and in_amount_range(parsed):
        changes["start_balance"] = parsed
    elif start is not None:
        logger.warning(
            "%s: ignoring non-numeric or out-of-range startBalance %r", source, start
        )

    return replace(current, **changes)
