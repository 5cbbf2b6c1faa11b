"""Conversion of LSP ``textDocument/documentSymbol`` results.

Both result shapes are accepted:

- ``DocumentSymbol[]``: nested, with ``range`` and ``children``
- ``SymbolInformation[]``: flat, with ``location.range`` and ``containerName``

Malformed entries are skipped with a warning instead of failing the whole
payload, since a partial symbol list still gives useful scopes.
"""

from __future__ import annotations

from typing import Any

import structlog

from scopeline.core.errors import SymbolParseError
from scopeline.scope.models import Position, Range, SymbolDescriptor, SymbolKind

logger = structlog.get_logger()


def parse_symbols(payload: Any, *, source: str = "<payload>") -> list[SymbolDescriptor] | None:
    """Convert a decoded documentSymbol result into descriptors.

    Args:
        payload: Decoded JSON. ``None`` means the provider had no answer yet.
        source: Label for log and error messages.

    Returns:
        Descriptors in payload order, or None when the payload is null.

    Raises:
        SymbolParseError: If the payload is neither null nor a list.
    """
    if payload is None:
        return None
    if not isinstance(payload, list):
        raise SymbolParseError.invalid_payload(
            source, f"expected a list of symbols, got {type(payload).__name__}"
        )
    return _parse_entries(payload, source)


def _parse_entries(entries: list[Any], source: str) -> list[SymbolDescriptor]:
    descriptors: list[SymbolDescriptor] = []
    for index, entry in enumerate(entries):
        descriptor = _parse_entry(entry, source)
        if descriptor is None:
            logger.warning("symbol_skipped", source=source, index=index)
            continue
        descriptors.append(descriptor)
    return descriptors


def _parse_entry(entry: Any, source: str) -> SymbolDescriptor | None:
    if not isinstance(entry, dict):
        return None
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        return None
    kind = _parse_kind(entry.get("kind"))
    if kind is None:
        return None

    raw_range = entry.get("range")
    if raw_range is None:
        location = entry.get("location")
        raw_range = location.get("range") if isinstance(location, dict) else None
    symbol_range = _parse_range(raw_range)
    if symbol_range is None:
        return None

    children = entry.get("children") or []
    return SymbolDescriptor(
        name=name,
        kind=kind,
        range=symbol_range,
        children=tuple(_parse_entries(children, source)) if isinstance(children, list) else (),
        detail=entry.get("detail") if isinstance(entry.get("detail"), str) else None,
        container_name=(
            entry.get("containerName") if isinstance(entry.get("containerName"), str) else None
        ),
    )


def _parse_kind(value: Any) -> SymbolKind | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return SymbolKind(value)
    except ValueError:
        return None


def _parse_range(value: Any) -> Range | None:
    if not isinstance(value, dict):
        return None
    start = _parse_position(value.get("start"))
    end = _parse_position(value.get("end"))
    if start is None or end is None:
        return None
    return Range(start, end)


def _parse_position(value: Any) -> Position | None:
    if not isinstance(value, dict):
        return None
    line = value.get("line")
    character = value.get("character", 0)
    if isinstance(line, bool) or not isinstance(line, int) or line < 0:
        return None
    if isinstance(character, bool) or not isinstance(character, int) or character < 0:
        return None
    return Position(line, character)
