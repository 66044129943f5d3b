"""Sequential, human-readable person identifiers."""
from __future__ import annotations

from family_tree.config import CONFIG


class IdGenerator:
    """Hands out P001, P002, ... and never repeats within its lifetime.

    Each registry owns its own generator, so independent registries (and
    tests) never share a counter.
    """

    def __init__(self, prefix: str | None = None, width: int | None = None, start: int = 0) -> None:
        self.prefix = prefix if prefix is not None else CONFIG.id_prefix
        self.width = width if width is not None else CONFIG.id_width
        self._counter = start

    @property
    def last_issued(self) -> int:
        return self._counter

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}{self._counter:0{self.width}d}"

    def reset(self) -> None:
        """Test hook: restart numbering from 1."""
        self._counter = 0
