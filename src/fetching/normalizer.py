"""Table-driven record normalization.

Backends disagree on field casing (``id``/``ID``/``locationId``/``LocationId``,
``name``/``Name``/``locationName``/...). Each canonical field lists the
spellings it accepts, in priority order; the first one holding a value wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def default_aliases(entity: str, name: str) -> tuple[str, ...]:
    if name == "id":
        spellings = ["id", "ID", "Id"]
    else:
        spellings = [name, _upper_first(name)]
    if entity:
        suffix = _upper_first(name)
        spellings += [f"{entity}{suffix}", f"{_upper_first(entity)}{suffix}"]
    return tuple(dict.fromkeys(spellings))


@dataclass(frozen=True)
class FieldSpec:
    name: str
    aliases: tuple[str, ...] = ()
    required: bool = False
    default: str = ""


@dataclass
class RecordNormalizer:
    entity: str
    fields: Sequence[FieldSpec] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        specs = list(self.fields)
        if not any(spec.name == "id" for spec in specs):
            specs.insert(0, FieldSpec("id", required=True))
        if not any(spec.name == "name" for spec in specs):
            specs.append(FieldSpec("name"))
        self._table: list[tuple[FieldSpec, tuple[str, ...]]] = [
            (spec, spec.aliases or default_aliases(self.entity, spec.name)) for spec in specs
        ]

    def aliases_for(self, name: str) -> tuple[str, ...]:
        for spec, aliases in self._table:
            if spec.name == name:
                return aliases
        raise KeyError(name)

    def normalize(self, raw: Any) -> dict[str, str] | None:
        if not isinstance(raw, dict):
            return None
        record: dict[str, str] = {}
        for spec, aliases in self._table:
            value = next((raw[a] for a in aliases if raw.get(a) is not None), None)
            if value is None:
                if spec.required:
                    return None
                record[spec.name] = spec.default
            else:
                record[spec.name] = str(value)
        return record

    def normalize_many(self, raws: Iterable[Any]) -> list[dict[str, str]]:
        out = []
        for raw in raws:
            record = self.normalize(raw)
            if record is not None:
                out.append(record)
        return out


__all__ = ["FieldSpec", "RecordNormalizer", "default_aliases"]
