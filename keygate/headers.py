"""Case-insensitive, multi-valued HTTP header mapping."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class HeaderMap:
    """Header names are matched case-insensitively; values keep their order.

    Names are stored lowercased. Each name maps to the list of values added
    for it, first one first.
    """

    def __init__(self, initial: Mapping[str, str | Iterable[str]] | None = None) -> None:
        self._values: dict[str, list[str]] = {}
        if initial:
            for name, value in initial.items():
                if isinstance(value, str):
                    self.add(name, value)
                else:
                    for item in value:
                        self.add(name, item)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> HeaderMap:
        """Build from (name, value) pairs, keeping repeated names in order."""
        headers = cls()
        for name, value in pairs:
            headers.add(name, value)
        return headers

    @staticmethod
    def _canonical(name: str) -> str:
        return name.lower()

    def add(self, name: str, value: str) -> None:
        self._values.setdefault(self._canonical(name), []).append(value)

    def set(self, name: str, value: str) -> None:
        self._values[self._canonical(name)] = [value]

    def get(self, name: str, default: str = "") -> str:
        """Return the first value for name, or default when absent."""
        values = self._values.get(self._canonical(name))
        if not values:
            return default
        return values[0]

    def get_all(self, name: str) -> list[str]:
        return list(self._values.get(self._canonical(name), []))

    def delete(self, name: str) -> None:
        self._values.pop(self._canonical(name), None)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self._canonical(name) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"HeaderMap({self._values!r})"
