# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Lazy rose trees of candidate values.

Every generated value comes with a tree of simpler alternatives, so that
shrinking is a matter of walking down that tree rather than of working
backwards from the value. The trees are usually enormous (often infinite, if
you count the regenerated inner values of ``bind``), so children are only
ever produced on demand and only the nodes that something actually looks at
are constructed.
"""

import itertools
from typing import Any, Callable, Generic, Iterable, Iterator, Sequence, TypeVar

import attr

from proptree.errors import FilterRejected

T = TypeVar("T")
U = TypeVar("U")


class LazySequence(Generic[T]):
    """A restartable view over a one-shot iterable.

    Elements are pulled from the source only when an iteration reaches them
    and are remembered, so every iteration sees the same elements in the same
    order. This matters: producing a child may consume randomness (the inner
    value of a ``bind`` is regenerated), and we need the tree to look the same
    however many times it is walked.
    """

    __slots__ = ("_source", "_cache")

    def __init__(self, source: Iterable[T]):
        self._source: "Iterator[T] | None" = iter(source)
        self._cache: list = []

    def _fill(self, n):
        while self._source is not None and len(self._cache) <= n:
            try:
                self._cache.append(next(self._source))
            except StopIteration:
                self._source = None

    def __iter__(self) -> Iterator[T]:
        i = 0
        while True:
            self._fill(i)
            if i >= len(self._cache):
                return
            yield self._cache[i]
            i += 1

    def __bool__(self):
        self._fill(0)
        return bool(self._cache)

    @property
    def n_realized(self) -> int:
        """The number of elements produced so far. Only useful for tests and
        debugging."""
        return len(self._cache)

    def __repr__(self):
        suffix = "" if self._source is None else ", ..."
        return "LazySequence([%s%s])" % (", ".join(map(repr, self._cache)), suffix)


EMPTY: LazySequence = LazySequence(())


def _as_children(children):
    if isinstance(children, LazySequence):
        return children
    if children is None:
        return EMPTY
    return LazySequence(children)


@attr.s(slots=True, frozen=True, repr=False)
class CandidateTree(Generic[T]):
    """A generated value together with its simpler alternatives.

    ``children`` is trusted to contain only candidates that are no more
    complex than ``root`` under the shrinking policy of whatever generator
    built the tree; nothing here checks that.
    """

    root: T = attr.ib()
    children: "LazySequence[CandidateTree[T]]" = attr.ib(
        default=None, converter=_as_children
    )

    def __repr__(self):
        return f"CandidateTree(root={self.root!r})"

    def map(self, f: Callable[[T], U]) -> "CandidateTree[U]":
        return CandidateTree(f(self.root), (child.map(f) for child in self.children))

    def bind(self, f: "Callable[[T], CandidateTree[U]]") -> "CandidateTree[U]":
        """Build a dependent tree. Shrinks of our own root come first, each
        re-bound through ``f``, followed by the shrinks of the inner tree at
        the current root."""
        inner = f(self.root)
        return CandidateTree(
            inner.root, itertools.chain(_rebind(self.children, f), inner.children)
        )

    def filter(self, condition: Callable[[T], Any]) -> "CandidateTree[T]":
        """Return a copy of this tree with every descendant whose root does
        not satisfy ``condition`` pruned, along with its own subtree.

        The root itself is not checked; callers are expected to have done so.
        """
        return CandidateTree(
            self.root,
            (
                child.filter(condition)
                for child in self.children
                if condition(child.root)
            ),
        )


def _rebind(children, f):
    for child in children:
        try:
            yield child.bind(f)
        except FilterRejected:
            # The inner generator could not produce a value for this simpler
            # outer value, so there is no candidate to offer here.
            continue


def constant_tree(value: T) -> CandidateTree[T]:
    return CandidateTree(value)


def unfold(value: T, shrink: Callable[[T], Iterable[T]]) -> CandidateTree[T]:
    """Build the tree for ``value`` by repeatedly applying ``shrink``, which
    must return the candidates one step simpler than its argument."""
    return CandidateTree(value, (unfold(v, shrink) for v in shrink(value)))


def _replace(items, i, item):
    result = list(items)
    result[i] = item
    return result


def combine(
    f: Callable[[list], U], trees: Sequence[CandidateTree[Any]]
) -> CandidateTree[U]:
    """Combine several trees coordinate-wise.

    The root is ``f`` applied to the list of the component roots. The
    children try each coordinate in turn, substituting one of that
    coordinate's children while every other coordinate is held at its current
    root, so that all the shrinks of the first coordinate are offered before
    any shrink of the second.
    """
    trees = list(trees)
    return CandidateTree(
        f([tree.root for tree in trees]),
        (
            combine(f, _replace(trees, i, child))
            for i, tree in enumerate(trees)
            for child in tree.children
        ),
    )
