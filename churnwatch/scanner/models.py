"""Data models for directory scans."""

from __future__ import annotations

from dataclasses import dataclass

TOKEN_SEPARATOR = "|"


def make_token(path: str, mtime: int) -> str:
    """Serialize a path and its modification time into a comparable token."""
    return f"{path}{TOKEN_SEPARATOR}{mtime}"


def split_token(token: str) -> tuple[str, int]:
    """Inverse of make_token. Splits on the last separator, so paths may contain '|'."""
    path, _, mtime = token.rpartition(TOKEN_SEPARATOR)
    if not path:
        raise ValueError(f"not a file record token: {token!r}")
    return path, int(mtime)


@dataclass(frozen=True)
class ScanResult:
    """Tokens produced by one filesystem walk, in walk order."""

    tokens: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def as_set(self) -> frozenset[str]:
        return frozenset(self.tokens)
