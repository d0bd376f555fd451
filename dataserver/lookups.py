"""Immutable lookup tables served by GetNumber and GetString."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping

from common.exceptions import NotFoundError


@dataclass(frozen=True)
class NumberEntry:
    """A named integer in the number table."""
    name: str
    value: int


@dataclass(frozen=True)
class StringEntry:
    """A string stored at a position of the string table."""
    index: int
    value: str


class NumberLookup:
    """
    Maps names to integers. Fixed at construction.
    """

    def __init__(self, numbers: Mapping[str, int]):
        """
        Initialize the table.

        Args:
            numbers: Name to value mapping; copied so later changes to the
                caller's mapping are not visible
        """
        self._numbers = MappingProxyType(dict(numbers))

    def get_number(self, name: str) -> int:
        """
        Obtain the number with the given name (exact, case-sensitive match).

        Raises:
            NotFoundError: If no number has that name
        """
        try:
            return self._numbers[name]
        except KeyError:
            raise NotFoundError(f"Number with name {name} not found") from None

    def entries(self) -> List[NumberEntry]:
        """List all entries of the table."""
        return [NumberEntry(name=name, value=value) for name, value in self._numbers.items()]

    def __len__(self) -> int:
        return len(self._numbers)


class StringLookup:
    """
    Ordered strings accessed by position. Fixed at construction.
    """

    def __init__(self, strings: Iterable[str]):
        self._strings = tuple(strings)

    def get_string(self, index: int) -> str:
        """
        Obtain the string at the given position.

        Negative positions are out of range; they never count from the end.

        Raises:
            NotFoundError: Unless 0 <= index < len(table)
        """
        if not 0 <= index < len(self._strings):
            raise NotFoundError(f"String with index {index} not found")
        return self._strings[index]

    def entries(self) -> List[StringEntry]:
        """List all entries of the table in order."""
        return [StringEntry(index=i, value=value) for i, value in enumerate(self._strings)]

    def __len__(self) -> int:
        return len(self._strings)
