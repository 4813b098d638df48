"""Fusion of edge chains that are joined by a single link.

Chains are addressed through a list in which chain ``n`` sits at index
``n - 1``; a slot holds ``None`` once its chain has been absorbed by
another one.  Family members are signed chain numbers: a positive
member names a neighbour whose start touches this chain, so this chain
appears among the neighbour's ancestors; a negative member names a
neighbour whose end touches it, so this chain appears among the
neighbour's sons.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from edgechains.chain import Chain, ChainError, ChainStore

START = "D"
END = "F"

_log = logging.getLogger(__name__)

_Merge = Callable[[Chain, Chain], Chain]


def _lookup(chains: Sequence[Optional[Chain]], member: int) -> Chain:
    chain = chains[abs(member) - 1]
    if chain is None:
        raise ChainError(f"chain {abs(member)} no longer exists")
    return chain


def _fuse(head: Chain, tail: Chain) -> Chain:
    head._check("merge")
    tail._check("merge")
    head.links.extend(tail.links)
    head.sons = list(tail.sons)
    tail.links = []
    tail.valid = False
    return head


def replace_in_family(chains, family, new, old):
    """In every chain of ``family``, replace the link to ``old`` by ``new``.

    Where a neighbour has no link to ``old``, its link to ``abs(new)``
    is removed instead.
    """
    for member in list(family):
        neighbour = _lookup(chains, member)
        if member > 0:
            if not neighbour.replace_ancestor(old, new):
                neighbour.remove_ancestor(abs(new))
        elif not neighbour.replace_son(old, new):
            neighbour.remove_son(abs(new))


def remove_from_family(chains, family, number):
    """Remove the link to ``number`` from every chain of ``family``.

    Returns False if some neighbour had no such link.
    """
    all_removed = True
    for member in list(family):
        neighbour = _lookup(chains, member)
        if member > 0:
            removed = neighbour.remove_ancestor(number)
        else:
            removed = neighbour.remove_son(number)
        if not removed:
            _log.warning("chain %d has no link to %d", neighbour.number, number)
            all_removed = False
    return all_removed


def _mark_contour(chain: Chain) -> None:
    chain.contour = True
    chain.closed = False


def _single_member(chain: Chain, family: list[int], chains) -> Optional[Chain]:
    if any(abs(member) == chain.number for member in family):
        _mark_contour(chain)
        return None
    if len(family) == 1:
        return chains[abs(family[0]) - 1]
    return None


def single_son(chain, chains):
    """Return the only son of ``chain``, or None.

    A chain that is its own son is marked as a contour and None is returned.
    """
    return _single_member(chain, chain.sons, chains)


def single_ancestor(chain, chains):
    """Return the only ancestor of ``chain``, or None.

    A chain that is its own ancestor is marked as a contour and None is returned.
    """
    return _single_member(chain, chain.ancestors, chains)


def invert_orientation(chains, family, number):
    """Negate ``number`` where it appears in the family of each member of ``family``.

    Returns False as soon as a member has no link equal to ``number``.
    """
    for member in list(family):
        neighbour = _lookup(chains, member)
        links = neighbour.ancestors if member > 0 else neighbour.sons
        try:
            position = links.index(number)
        except ValueError:
            return False
        links[position] = -number
    return True


def _include(chains, p: Chain, p_end: str, x: Chain, x_end: str, merge: _Merge) -> Chain:
    for end in (p_end, x_end):
        if end not in (START, END):
            raise ValueError(f"chain end must be {START!r} or {END!r}, not {end!r}")
    number_x = x.number
    if p_end == x_end:
        p.mirror()
        if not invert_orientation(chains, p.ancestors, -p.number):
            _log.warning("include: ancestors of chain %d are inconsistent", p.number)
        if not invert_orientation(chains, p.sons, p.number):
            _log.warning("include: sons of chain %d are inconsistent", p.number)
    if x_end == START:
        merge(p, x)
        p.number = number_x
        chains[number_x - 1] = p
        return p
    merge(x, p)
    chains[number_x - 1] = x
    return x


def include(chains, p, p_end, x, x_end):
    """Join chain ``p`` to chain ``x`` where end ``p_end`` of ``p`` meets end ``x_end`` of ``x``.

    Ends are START or END.  When both ends are alike ``p`` is reversed
    first.  The joined chain keeps the number of ``x``, takes its slot
    in ``chains`` and is returned.
    """
    return _include(chains, p, p_end, x, x_end, _fuse)


def single_link(number, chain):
    """Locate the family of ``chain`` that holds ``number`` and tell if it has one member.

    Returns ``(end, single)``: ``end`` is START when a positive number
    places the link among the ancestors, END otherwise.
    """
    if number > 0:
        return START, len(chain.ancestors) <= 1
    return END, len(chain.sons) <= 1


class ChainFusion:
    """Merges chains of a numbered list that are joined by a unique link.

    ``sizes`` holds, for each slot, the number of links of its chain,
    negated when it exceeds the noise size, and 0 for empty slots.
    """

    def __init__(self, store, chains, noise_size, keep_short_bridges=True):
        self.store: ChainStore = store
        self.chains: list[Optional[Chain]] = chains
        self.keep_short_bridges = keep_short_bridges
        self.sizes: list[int] = []
        self.pending: list[bool] = []
        self.removed = 0
        for chain in chains:
            if chain is None:
                self.sizes.append(0)
                self.pending.append(False)
            else:
                size = len(chain.links)
                self.sizes.append(size if size <= noise_size else -size)
                self.pending.append(True)

    def _bridge(self, index: int, chain: Chain) -> None:
        # A one-link chain with two ancestors keeps one as a son, so that
        # it is neither dropped nor merged away.
        if abs(self.sizes[index]) != 1 or len(chain.ancestors) != 2:
            return
        second = chain.ancestors[1]
        chain.add_son(second)
        chain.remove_ancestor(second)
        invert_orientation(self.chains, chain.sons, index + 1)

    def _absorb(self, index: int, x: Chain, p: Chain, p_end: str, x_end: str, threshold: int) -> Chain:
        number_p = p.number
        self.chains[number_p - 1] = None
        x = _include(self.chains, p, p_end, x, x_end, self.store.merge)
        if x_end == END:
            replace_in_family(self.chains, x.sons, -x.number, number_p)
        else:
            replace_in_family(self.chains, x.ancestors, x.number, number_p)
        total = abs(self.sizes[index]) + abs(self.sizes[number_p - 1])
        self.sizes[index] = -total if total > threshold else total
        self.sizes[number_p - 1] = 0
        self.pending[number_p - 1] = False
        return x

    def run(self, threshold):
        """Make one fusion pass over the pending chains; return how many were absorbed."""
        absorbed = 0
        for index, pending in enumerate(self.pending):
            if not pending:
                continue
            x = self.chains[index]
            if x is None:
                continue
            if self.keep_short_bridges:
                self._bridge(index, x)
            while True:
                p = single_son(x, self.chains)
                if p is None:
                    break
                p_end, single = single_link(x.sons[0], p)
                if not single:
                    break
                x = self._absorb(index, x, p, p_end, END, threshold)
                absorbed += 1
            while True:
                p = single_ancestor(x, self.chains)
                if p is None:
                    break
                p_end, single = single_link(x.ancestors[0], p)
                if not single:
                    break
                x = self._absorb(index, x, p, p_end, START, threshold)
                absorbed += 1
            self.pending[index] = False
        self.removed += absorbed
        return absorbed