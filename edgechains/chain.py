"""Edge chains kept in a bounded store of links.

A chain is an ordered list of pixel links together with two small
families of neighbouring chains: its ancestors, connected at its start,
and its sons, connected at its end.  A family member is the number of
the neighbouring chain; its sign records which end of the neighbour
touches this chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

FAMILY_SIZE = 4
_HEADER_CELLS = 3


class ChainError(Exception):
    """Raised when an operation is applied to something that is not a live chain."""


class StoreFullError(ChainError):
    """Raised when the chain store has no free cells left."""


@dataclass
class Link:
    """One pixel of a chain: its column, its row and its grey level."""

    x: int
    y: int
    level: float


def _member_matches(member: int, number: int, exact: bool) -> bool:
    return member == number if exact else abs(member) == abs(number)


def _add_member(family: list[int], number: int, exact: bool) -> bool:
    if any(_member_matches(member, number, exact) for member in family):
        return False
    if len(family) >= FAMILY_SIZE:
        return False
    family.append(number)
    return True


def _replace_member(family: list[int], old: int, new: int) -> bool:
    for index, member in enumerate(family):
        if abs(member) == old:
            family[index] = new
            return True
    return False


def _remove_member(family: list[int], number: int) -> bool:
    number = abs(number)
    matches = [index for index, member in enumerate(family) if abs(member) == number]
    if not matches:
        return False
    # The last match takes the place of the last member, which is dropped.
    family[matches[-1]] = family[-1]
    family.pop()
    return True


def _format_family(family: list[int]) -> str:
    padded = list(family) + [0] * (FAMILY_SIZE - len(family))
    return ",".join(str(member) for member in padded)


@dataclass
class Chain:
    """An ordered list of links with its ancestor and son families."""

    number: int
    links: list[Link] = field(default_factory=list)
    ancestors: list[int] = field(default_factory=list)
    sons: list[int] = field(default_factory=list)
    closed: bool = False
    contour: bool = False
    valid: bool = True

    def _check(self, operation: str) -> None:
        if not self.valid:
            raise ChainError(f"{operation}: {self.number} is not a chain")

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self) -> Iterator[Link]:
        return iter(self.links)

    def add_ancestor(self, number: int) -> bool:
        """Add an ancestor unless it is this chain or already present, sign ignored."""
        self._check("add_ancestor")
        if number == 0:
            raise ChainError("add_ancestor: 0 is not an ancestor")
        if abs(number) == self.number:
            return False
        return _add_member(self.ancestors, number, exact=False)

    def add_ancestor_exact(self, number: int) -> bool:
        """Add an ancestor unless the same signed value is already present."""
        self._check("add_ancestor_exact")
        if number == 0:
            raise ChainError("add_ancestor_exact: 0 is not an ancestor")
        return _add_member(self.ancestors, number, exact=True)

    def replace_ancestor(self, old: int, new: int) -> bool:
        """Replace the first ancestor numbered ``old`` (either sign) by ``new``."""
        self._check("replace_ancestor")
        return _replace_member(self.ancestors, old, new)

    def remove_ancestor(self, number: int) -> bool:
        """Remove the ancestor numbered ``number`` (either sign), compacting the family."""
        self._check("remove_ancestor")
        if number == 0:
            raise ChainError("remove_ancestor: 0 is not an ancestor")
        return _remove_member(self.ancestors, number)

    def add_son(self, number: int) -> bool:
        """Add a son unless it is this chain or already present, sign ignored."""
        self._check("add_son")
        if number == 0:
            raise ChainError("add_son: 0 is not a son")
        if abs(number) == self.number:
            return False
        return _add_member(self.sons, number, exact=False)

    def add_son_exact(self, number: int) -> bool:
        """Add a son unless the same signed value is already present."""
        self._check("add_son_exact")
        if number == 0:
            raise ChainError("add_son_exact: 0 is not a son")
        return _add_member(self.sons, number, exact=True)

    def replace_son(self, old: int, new: int) -> bool:
        """Replace the first son numbered ``old`` (either sign) by ``new``."""
        self._check("replace_son")
        return _replace_member(self.sons, old, new)

    def remove_son(self, number: int) -> bool:
        """Remove the son numbered ``number`` (either sign), compacting the family."""
        self._check("remove_son")
        if number == 0:
            raise ChainError("remove_son: 0 is not a son")
        return _remove_member(self.sons, number)

    def first(self) -> Link:
        """Return the first link of the chain."""
        self._check("first")
        if not self.links:
            raise ChainError(f"first: chain {self.number} is empty")
        return self.links[0]

    def last(self) -> Link:
        """Return the last link of the chain."""
        self._check("last")
        if not self.links:
            raise ChainError(f"last: chain {self.number} is empty")
        return self.links[-1]

    def mirror(self) -> None:
        """Reverse the direction of the chain, swapping ancestors and sons."""
        self._check("mirror")
        self.links.reverse()
        self.ancestors, self.sons = self.sons, self.ancestors

    def mean_level(self) -> float:
        """Return the mean grey level of the links."""
        if not self.links:
            raise ChainError(f"mean_level: chain {self.number} is empty")
        return sum(link.level for link in self.links) / len(self.links)

    def mark_contour(self) -> None:
        """Flag the chain as a contour."""
        self._check("mark_contour")
        self.contour = True

    def is_closed(self) -> bool:
        """Tell whether the chain is closed."""
        self._check("is_closed")
        return self.closed

    def is_contour(self) -> bool:
        """Tell whether the chain is a contour."""
        self._check("is_contour")
        return self.contour

    def describe(self, with_points: bool = False) -> str:
        """Return a readable summary of the chain, optionally with its links."""
        text = (
            f"chain {self.number} ancestors={_format_family(self.ancestors)} "
            f"sons={_format_family(self.sons)}\n"
        )
        if with_points:
            text += "".join(f"({link.x},{link.y})" for link in self.links) + "\n"
        return text


class ChainStore:
    """A fixed pool of cells from which chains and their links are taken.

    Opening a chain uses three cells (its head and its two family
    records) and every link uses one more.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.free = capacity
        self._last_number = 0

    def open(self) -> Chain:
        """Open a new empty chain with the next number."""
        if self.free < _HEADER_CELLS:
            raise StoreFullError("no room left to open a chain")
        self.free -= _HEADER_CELLS
        self._last_number += 1
        return Chain(number=self._last_number)

    def append(self, chain: Chain, x: int, y: int, level: float) -> Link:
        """Append a link at the end of ``chain`` and return it."""
        chain._check("append")
        if self.free < 1:
            raise StoreFullError(f"no room left for pixel {x} {y}")
        self.free -= 1
        link = Link(x, y, level)
        chain.links.append(link)
        return link

    def release(self, chain: Chain) -> None:
        """Give the cells of ``chain`` back to the store; the chain is no longer usable."""
        chain._check("release")
        self.free += _HEADER_CELLS + len(chain.links)
        chain.links = []
        chain.valid = False

    def merge(self, head: Chain, tail: Chain) -> Chain:
        """Append the links of ``tail`` to ``head``, which inherits the sons of ``tail``.

        ``tail`` is retired; its header cells are not returned to the store.
        """
        head._check("merge")
        tail._check("merge")
        head.links.extend(tail.links)
        head.sons = list(tail.sons)
        tail.links = []
        tail.valid = False
        return head