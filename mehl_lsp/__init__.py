"""Mehl Language Server package.

This package provides:
- A pygls-based Language Server for Mehl.
- A static indexer that reads documents with the Mehl reader without evaluating them.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
