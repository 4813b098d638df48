"""Selection of chains before polygonal approximation, and their printed headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class ChainFilter:
    """Bounds that a chain must lie strictly within to be approximated.

    A chain is accepted when its number of links, the mean of its grey
    levels and their variance all lie strictly between the matching
    bounds.  With ``closed_only`` set, only closed chains are accepted.
    """

    min_length: int = 0
    max_length: int = 10000
    min_mean: float = 0.0
    max_mean: float = 10000.0
    min_variance: float = 0.0
    max_variance: float = 10000.0
    closed_only: bool = False

    def accepts(self, length: int, mean: float, variance: float, closed: bool) -> bool:
        """Tell whether a chain with these features passes the filter."""
        valid = (
            self.min_length < length < self.max_length
            and self.min_mean < mean < self.max_mean
            and self.min_variance < variance < self.max_variance
        )
        if not valid:
            return False
        return bool(closed) or not self.closed_only


def format_header(
    number: int,
    length: int,
    head_links: Sequence[int],
    tail_links: Sequence[int],
    closed: bool,
    mean: float,
    variance: float,
) -> str:
    """Return the printed description of a chain and of the chains linked to its ends."""
    lines = [
        "",
        "",
        f" ****** Features of chain number : {number} ",
        f"        Number of links : {length}",
        f"        Mean (grey level) : {mean:.6f}    Variance  : {variance:.6f} ",
        f"        Links at head : {len(head_links)} ",
    ]
    lines.extend(f"        - Linked chain number {link} " for link in head_links)
    lines.append(f"        Links at tail : {len(tail_links)} ")
    lines.extend(f"        - Linked chain number {link} " for link in tail_links)
    if closed:
        lines.append(" This chain is a closed loop ")
    return "\n".join(lines) + "\n"