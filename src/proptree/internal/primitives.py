# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from proptree.internal.generator import Generator
from proptree.internal.lazytree import CandidateTree, constant_tree, unfold


def _halve(n):
    # Rounds towards zero, so that halving a distance never overshoots.
    return n // 2 if n >= 0 else -((-n) // 2)


def shrink_integer(value, target):
    """Candidates for ``value``, simplest first: the target itself, then
    values whose distance from ``value`` halves each time."""
    if value == target:
        return
    yield target
    half = _halve(value - target)
    while half != 0:
        candidate = value - half
        if candidate != target:
            yield candidate
        half = _halve(half)


class JustGenerator(Generator):
    def __init__(self, value):
        self.value = value

    def do_generate(self, size, random, max_consecutive_attempts):
        return constant_tree(self.value)

    def __repr__(self):
        return f"just({self.value!r})"


class IntegersGenerator(Generator[int]):
    """Integers within optional bounds, drawn from a window of ``size`` on
    either side of the shrink target."""

    def __init__(self, min_value=None, max_value=None):
        self.min_value = min_value
        self.max_value = max_value

    @property
    def target(self):
        target = 0
        if self.min_value is not None:
            target = max(target, self.min_value)
        if self.max_value is not None:
            target = min(target, self.max_value)
        return target

    def do_generate(self, size, random, max_consecutive_attempts):
        target = self.target
        lower = target - size
        upper = target + size
        if self.min_value is not None:
            lower = max(lower, self.min_value)
        if self.max_value is not None:
            upper = min(upper, self.max_value)
        value = random.randint(lower, upper)
        return unfold(value, lambda v: shrink_integer(v, target))

    def __repr__(self):
        bits = []
        if self.min_value is not None:
            bits.append(f"min_value={self.min_value!r}")
        if self.max_value is not None:
            bits.append(f"max_value={self.max_value!r}")
        return "integers(%s)" % (", ".join(bits),)


class BooleansGenerator(Generator[bool]):
    def do_generate(self, size, random, max_consecutive_attempts):
        if random.random() < 0.5:
            return CandidateTree(True, [constant_tree(False)])
        return constant_tree(False)

    def __repr__(self):
        return "booleans()"


class ListGenerator(Generator[list]):
    """A generator for lists which takes a generator for its elements and the
    allowed lengths, and generates lists with the correct size and contents.

    Lists shrink by first deleting single elements, front to back, and then
    by shrinking each element in place.
    """

    def __init__(self, elements, min_size=0, max_size=None):
        self.element_generator = elements
        self.min_size = min_size
        self.max_size = max_size

    def do_generate(self, size, random, max_consecutive_attempts):
        upper = self.min_size + size
        if self.max_size is not None:
            upper = min(upper, self.max_size)
        length = random.randint(self.min_size, upper)
        trees = [
            self.element_generator.generate(size, random, max_consecutive_attempts)
            for _ in range(length)
        ]
        return _list_tree(trees, self.min_size)

    def __repr__(self):
        return "lists({!r}, min_size={!r}, max_size={!r})".format(
            self.element_generator, self.min_size, self.max_size
        )


def _list_tree(trees, min_size):
    def children():
        if len(trees) > min_size:
            for i in range(len(trees)):
                yield _list_tree(trees[:i] + trees[i + 1 :], min_size)
        for i, tree in enumerate(trees):
            for child in tree.children:
                yield _list_tree(trees[:i] + [child] + trees[i + 1 :], min_size)

    return CandidateTree([tree.root for tree in trees], children())
