# edgechains

`edgechains` works with chains of edge points taken from an image. It does five things:

- It keeps the chains in a store of fixed size.
- It records which chains touch one another.
- It fuses chains that are joined by a single link.
- It picks the points where a chain turns.
- It describes the straight segments between those points and orients each segment from the image contrast.

Every point of a chain is a `Link` holding its column `x`, its row `y` and its grey level `level`.

The package is pure Python and has no dependencies.

## Chains and their store

`edgechains.chain.ChainStore(capacity)` is a pool of `capacity` cells:

- Opening a chain with `open()` uses three cells and gives the chain the next number, starting at 1.
- Each point added with `append(chain, x, y, level)` uses one more cell.
- When there are not enough free cells, both raise `StoreFullError`.
- `release(chain)` gives all of a chain's cells back.
- `merge(head, tail)` appends the links of `tail` to `head`, and `head` takes over the sons of `tail`. The `tail` chain is retired, and its header cells are not returned.

A released or retired chain raises `ChainError` on most operations.

```python
from edgechains.chain import ChainStore

store = ChainStore(capacity=100)
a = store.open()            # number 1
for x in range(5):
    store.append(a, x, 0, 10)

b = store.open()            # number 2
store.append(b, 5, 1, 20)

print(a.first(), a.last(), a.mean_level())   # Link(x=0, ...) Link(x=4, ...) 10.0

store.merge(a, b)           # a now has 6 links; b can no longer be used
a.mirror()                  # reverse the links and swap ancestors with sons
store.release(a)            # return a's cells to the store
```

### Families

Each `Chain` keeps two families of up to four neighbours each:

- `ancestors` are the chains joined at its start.
- `sons` are the chains joined at its end.

A member is the neighbour's number. A positive member means the neighbour's start touches this chain. A negative member means the neighbour's end touches it.

The family methods are:

- `add_ancestor` / `add_son` add a member. They refuse the chain's own number, a number already present whatever its sign, and a fifth member. They return whether the member was added. Zero raises `ChainError`.
- `add_ancestor_exact` / `add_son_exact` do the same, but treat a number as present only if it has the same sign. They do not refuse the chain's own number.
- `replace_ancestor(old, new)` / `replace_son(old, new)` replace the first member numbered `old`, in either sign, by `new`.
- `remove_ancestor` / `remove_son` remove a member. Its place is filled by the last member of the family.

The other methods are:

- `mark_contour`, `is_contour` and `is_closed` set and read the chain's flags.
- `describe(with_points=False)` returns a text summary, with the points as well when `with_points` is set.

## Fusion

`edgechains.fusion.ChainFusion(store, chains, noise_size, keep_short_bridges=True)` works on a list in which chain `n` sits at index `n - 1`.

It records the size of each chain in `sizes`. A size that exceeds `noise_size` is stored as a negative number.

`run(threshold)` makes one pass over the chains not yet handled:

- While a chain has a single son whose own family back to it has one member, the son is absorbed.
- The same is done with a single ancestor.
- A chain that is its own son or ancestor is marked as a contour and stops there.
- Absorbed chains leave `None` in the list.
- The combined size is stored as a negative number once it exceeds `threshold`.

`run` returns how many chains were absorbed, and `removed` keeps the running total.

With `keep_short_bridges`, a one-link chain that has two ancestors moves its second ancestor to its sons before fusion.

```python
from edgechains.chain import ChainStore
from edgechains.fusion import ChainFusion

store = ChainStore(capacity=100)
a, b = store.open(), store.open()
for x in range(5):
    store.append(a, x, 0, 10)
store.append(b, 5, 0, 10)
a.add_son(b.number)          # b's start touches a's end
b.add_ancestor(-a.number)    # a's end touches b's start

chains = [a, b]
fusion = ChainFusion(store, chains, noise_size=2)
print(fusion.run(threshold=2))   # 1
print(len(a), chains[1])         # 6 None
```

The steps used by fusion are public as well:

- `single_son` and `single_ancestor`
- `single_link`
- `include`
- `invert_orientation`
- `replace_in_family`
- `remove_from_family`

Chain ends are named by `START` (`"D"`) and `END` (`"F"`).

## Sampling a chain

```python
sample_by_angle(points, eps1=25, eps2=40, dmin1=4.0, dmin2=4.0, field=3.0)
```

This function lives in `edgechains.sampling`. It returns the indices of the points kept as polygon vertices. Only the first two entries of each item in `points` are used, taken as integer coordinates.

The local direction at a point is the vector to the first later point at least `dmin1` away.

A break is found in either of two cases:

- The direction turns more than `eps1` degrees from the reference.
- The spread of directions seen since the reference exceeds `eps2` degrees.

At a break, the vertex kept is the point of greatest curvature within `field` of the break. Curvature is measured between vectors of length `dmin2`.

The first point is always kept, and the last point is always appended.

## Segment features

`edgechains.segments.segment_features(points, vertices, number, closed)` returns one `Segment` for each pair of consecutive vertices. Here `points` holds `(x, y, level)` items.

Each `Segment` holds:

- `length`.
- `mean`: the mean grey level of the links from one vertex to the next, both included.
- `variance`: the variance of those grey levels, further divided by their count.
- The midpoint `x_mid`, `y_mid`.
- `cos` and `sin`.
- `orientation` in degrees, from 0 to 360.
- `error`, which is always 0.0: the segment joins the vertices themselves.
- The chain's `chain` number, `chain_length` and `closed` flag.
- `segment_count`.
- The `origin` and `end` links.

Vertices out of order, or that coincide, raise `ValueError`.

## Orientation from the image

```python
orient_segment(image, origin, end, midpoint, threshold=4.0, window=7)
```

This function lives in `edgechains.orientation`. The `image` is a sequence of rows of grey levels, addressed with 1-based coordinates.

It reads a band of `window` rows around the midpoint and compares the grey levels on the two sides of the segment with the level at the centre. It then swaps the ends, if needed, so that the dark side lies on the right.

It returns an `OrientedSegment` holding:

- the new `origin` and `end`;
- `cos`, `sin` and `orientation`, in degrees from -180 to 180;
- the `Contrast` code;
- the sampling `quadrant`;
- whether the segment was `inverted`.

A window smaller than 3, or one that falls outside the image, raises `ValueError`.

The building blocks are also public:

- `quadrant(dx, dy)`
- `contrast_code(s, s1, centre, threshold)`
- `segment_angle(origin, end)`

## Selecting chains

`edgechains.selection.ChainFilter` holds strict lower and upper bounds on three values:

- the number of links;
- the mean grey level;
- the variance.

Its `closed_only` flag restricts the selection to closed chains.

`accepts(length, mean, variance, closed)` tells whether a chain passes the filter.

`format_header(number, length, head_links, tail_links, closed, mean, variance)` returns a printed summary of a chain and of the chains linked to its ends.

## What the package does not do

Everything works on data held in memory. The package does not:

- read images;
- read or write chain or segment files;
- extract chains from an image;
- remove noise chains;
- fit segments by least squares;
- provide a command-line program.