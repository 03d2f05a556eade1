# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import contextlib
import sys
from io import StringIO
from random import Random

from proptree.generators import from_trees
from proptree.internal.lazytree import CandidateTree, unfold
from proptree.reporting import default, with_reporter


@contextlib.contextmanager
def capture_out():
    old_out = sys.stdout
    try:
        new_out = StringIO()
        sys.stdout = new_out
        with with_reporter(default):
            yield new_out
    finally:
        sys.stdout = old_out


@contextlib.contextmanager
def capture_reports():
    reports = []
    with with_reporter(reports.append):
        yield reports


def countdown_tree(n):
    """The tree for ``n`` whose only child is ``n - 1``, down to zero."""
    return unfold(n, lambda v: [v - 1] if v > 0 else [])


def countdown(start):
    """A generator which always produces ``start``, shrinking one at a time."""
    return from_trees(lambda size, random: countdown_tree(start))


def atomic(value):
    """A generator which always produces ``value`` and cannot shrink it."""
    return from_trees(lambda size, random: CandidateTree(value))


class Counter:
    def __init__(self):
        self.count = 0

    def __call__(self, *args, **kwargs):
        self.count += 1


def tree_values(tree, depth):
    """The roots of ``tree`` down to ``depth`` levels, as nested pairs."""
    if depth == 0:
        return tree.root
    return (tree.root, [tree_values(c, depth - 1) for c in tree.children])


def draw(generator, size=10, seed=0, max_consecutive_attempts=30):
    return generator.generate(size, Random(seed), max_consecutive_attempts)
