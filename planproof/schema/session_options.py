"""Case-insensitive view of a session's reported options."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class SessionOptionSet(Mapping[str, str]):
    """Option name → current value, as reported by the engine.

    Names keep the case the engine reported them in, but every lookup is
    case-insensitive: ``options["ARITHABORT"]`` finds a row reported as
    ``arithabort``.  Iteration follows the order the pairs were supplied in.
    When the same name is supplied twice, the later value wins.

    Args:
        pairs: ``(name, value)`` pairs.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._entries: dict[str, tuple[str, str]] = {}
        for name, value in pairs:
            self._entries[name.casefold()] = (name, value)

    def __getitem__(self, name: str) -> str:
        return self._entries[name.casefold()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SessionOptionSet({dict(self.items())!r})"

    def value_equals(self, name: str, expected: str) -> bool:
        """Return ``True`` when ``name`` is present with ``expected`` (any case)."""
        actual = self.get(name)
        return actual is not None and actual.casefold() == expected.casefold()
