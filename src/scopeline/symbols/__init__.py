"""Symbol providers and payload adapters."""

from scopeline.symbols.lsp import parse_symbols
from scopeline.symbols.provider import SymbolFileProvider, SymbolProvider

__all__ = ["SymbolFileProvider", "SymbolProvider", "parse_symbols"]
