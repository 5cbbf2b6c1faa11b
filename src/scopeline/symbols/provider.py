"""Symbol provider boundary.

A provider is any async callable taking a document identity and returning
descriptors, or None while it has nothing to offer (e.g. a language
server still warming up). The controller never inspects how symbols are
obtained.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import structlog

from scopeline.core.errors import SymbolParseError
from scopeline.scope.models import SymbolDescriptor
from scopeline.symbols.lsp import parse_symbols

logger = structlog.get_logger()


class SymbolProvider(Protocol):
    async def __call__(self, document: str) -> Sequence[SymbolDescriptor] | None: ...


class SymbolFileProvider:
    """Serves symbols saved from a ``textDocument/documentSymbol`` response.

    The file is re-read on every call so edits to it are picked up after the
    controller is marked stale.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    async def __call__(self, document: str) -> list[SymbolDescriptor] | None:
        text = await asyncio.to_thread(self._read)
        if text is None:
            logger.debug("symbol_file_missing", path=str(self.path), document=document)
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise SymbolParseError.invalid_json(str(self.path), str(e)) from e
        symbols = parse_symbols(payload, source=str(self.path))
        return symbols or None

    def _read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
