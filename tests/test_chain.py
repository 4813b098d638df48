import pytest

from edgechains.chain import Chain, ChainError, ChainStore, Link, StoreFullError


def make_chain(store, points):
    chain = store.open()
    for x, y, level in points:
        store.append(chain, x, y, level)
    return chain


def test_open_numbers_chains_in_sequence():
    store = ChainStore(100)
    first = store.open()
    second = store.open()
    assert second.number == first.number + 1
    assert first.number == 1


def test_open_fails_when_store_is_too_small():
    store = ChainStore(2)
    with pytest.raises(StoreFullError):
        store.open()


def test_append_fails_when_store_is_full():
    store = ChainStore(3)
    chain = store.open()
    with pytest.raises(StoreFullError):
        store.append(chain, 1, 1, 5.0)
    assert len(chain) == 0


def test_append_first_last_and_iteration():
    store = ChainStore(50)
    points = [(1, 2, 10.0), (2, 2, 20.0), (3, 3, 30.0)]
    chain = make_chain(store, points)
    assert len(chain) == 3
    assert chain.first() == Link(1, 2, 10.0)
    assert chain.last() == Link(3, 3, 30.0)
    assert [(link.x, link.y, link.level) for link in chain] == points


def test_first_and_last_of_empty_chain_raise():
    chain = ChainStore(10).open()
    with pytest.raises(ChainError):
        chain.first()
    with pytest.raises(ChainError):
        chain.last()


def test_release_gives_cells_back():
    store = ChainStore(40)
    before = store.free
    chain = make_chain(store, [(0, 0, 1.0), (1, 0, 1.0)])
    assert store.free < before
    store.release(chain)
    assert store.free == before


def test_released_chain_is_rejected():
    store = ChainStore(40)
    chain = make_chain(store, [(0, 0, 1.0)])
    store.release(chain)
    with pytest.raises(ChainError):
        chain.add_son(2)
    with pytest.raises(ChainError):
        store.append(chain, 1, 1, 1.0)
    with pytest.raises(ChainError):
        store.release(chain)
    with pytest.raises(ChainError):
        chain.is_contour()


def test_add_ancestor_rules():
    chain = Chain(number=5)
    assert chain.add_ancestor(5) is False
    assert chain.add_ancestor(-5) is False
    assert chain.add_ancestor(2) is True
    assert chain.add_ancestor(-2) is False
    assert chain.add_ancestor(3) is True
    assert chain.add_ancestor(4) is True
    assert chain.add_ancestor(6) is True
    assert chain.add_ancestor(7) is False
    assert chain.ancestors == [2, 3, 4, 6]


def test_add_ancestor_zero_raises():
    chain = Chain(number=1)
    with pytest.raises(ChainError):
        chain.add_ancestor(0)
    with pytest.raises(ChainError):
        chain.add_ancestor_exact(0)


def test_add_ancestor_exact_keeps_both_signs_and_self():
    chain = Chain(number=5)
    assert chain.add_ancestor_exact(2) is True
    assert chain.add_ancestor_exact(-2) is True
    assert chain.add_ancestor_exact(2) is False
    assert chain.add_ancestor_exact(5) is True
    assert chain.ancestors == [2, -2, 5]


def test_replace_and_remove_ancestor():
    chain = Chain(number=9)
    for number in (1, -2, 3):
        chain.add_ancestor(number)
    assert chain.replace_ancestor(2, 8) is True
    assert chain.ancestors == [1, 8, 3]
    assert chain.replace_ancestor(4, 7) is False
    assert chain.remove_ancestor(-1) is True
    assert chain.ancestors == [3, 8]
    assert chain.remove_ancestor(6) is False
    with pytest.raises(ChainError):
        chain.remove_ancestor(0)


def test_son_family_mirrors_ancestor_rules():
    chain = Chain(number=4)
    assert chain.add_son(4) is False
    assert chain.add_son(-1) is True
    assert chain.add_son(1) is False
    assert chain.add_son_exact(1) is True
    assert chain.sons == [-1, 1]
    assert chain.replace_son(1, 6) is True
    assert chain.sons == [6, 1]
    assert chain.remove_son(1) is True
    assert chain.sons == [6]
    with pytest.raises(ChainError):
        chain.add_son(0)
    with pytest.raises(ChainError):
        chain.remove_son(0)


def test_mirror_reverses_links_and_swaps_families():
    store = ChainStore(50)
    points = [(1, 1, 1.0), (2, 1, 2.0), (3, 2, 3.0)]
    chain = make_chain(store, points)
    chain.add_ancestor(7)
    chain.add_son(-8)
    chain.mirror()
    assert [(l.x, l.y, l.level) for l in chain] == list(reversed(points))
    assert chain.ancestors == [-8]
    assert chain.sons == [7]
    chain.mirror()
    assert [(l.x, l.y, l.level) for l in chain] == points


def test_merge_appends_links_and_inherits_sons():
    store = ChainStore(60)
    head = make_chain(store, [(0, 0, 1.0), (1, 0, 1.0)])
    tail = make_chain(store, [(2, 0, 3.0), (3, 0, 3.0)])
    head.add_ancestor(9)
    head.add_son(tail.number)
    tail.add_son(11)
    merged = store.merge(head, tail)
    assert merged is head
    assert [link.x for link in head] == [0, 1, 2, 3]
    assert head.sons == [11]
    assert head.ancestors == [9]
    assert head.last() == Link(3, 0, 3.0)
    assert tail.valid is False
    with pytest.raises(ChainError):
        tail.first()


def test_mean_level():
    store = ChainStore(30)
    chain = make_chain(store, [(0, 0, 10.0), (1, 0, 20.0), (2, 0, 30.0)])
    assert chain.mean_level() == pytest.approx(20.0)
    with pytest.raises(ChainError):
        store.open().mean_level()


def test_contour_and_closed_flags():
    chain = Chain(number=3)
    assert chain.is_contour() is False
    assert chain.is_closed() is False
    chain.mark_contour()
    assert chain.is_contour() is True
    assert chain.is_closed() is False


def test_describe_lists_families_and_points():
    store = ChainStore(30)
    chain = make_chain(store, [(4, 5, 1.0), (6, 7, 1.0)])
    chain.add_ancestor(2)
    short = chain.describe(False)
    assert str(chain.number) in short
    assert "(4,5)" not in short
    full = chain.describe(True)
    assert "(4,5)(6,7)" in full
    assert full.startswith(short)