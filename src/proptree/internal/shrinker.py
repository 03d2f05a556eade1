# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from enum import IntEnum
from functools import partial
from typing import Any, Callable, Optional

import attr

from proptree.hooks import NO_HOOKS, Hooks
from proptree.internal.lazytree import CandidateTree
from proptree.reporting import verbose_report


class Status(IntEnum):
    VALID = 0
    INTERESTING = 1

    def __repr__(self) -> str:
        return f"Status.{self.name}"


@attr.s(slots=True, frozen=True)
class Outcome:
    """The result of running a property body once: either it passed, or it
    failed with the exception it raised."""

    status: Status = attr.ib()
    failure: Optional[BaseException] = attr.ib(default=None)

    @property
    def failed(self) -> bool:
        return self.status == Status.INTERESTING

    @classmethod
    def failing(cls, failure: BaseException) -> "Outcome":
        return cls(Status.INTERESTING, failure)


PASSED = Outcome(Status.VALID)


@attr.s(slots=True, frozen=True)
class ShrinkResult:
    value: Any = attr.ib()
    failure: BaseException = attr.ib()
    n_shrink_steps: int = attr.ib()
    calls: int = attr.ib()


class Shrinker:
    """A shrinker is a child object of a property check which is responsible
    for walking the candidate tree of a failing input down to a locally
    minimal one.

    The search is greedy and depth first: the children of the current node
    are tried in order, and the first one which still fails becomes the new
    current node, at which point we start again from *its* children. Siblings
    of a node we have moved away from are never looked at again. We stop when
    no child of the current node fails, or once we have taken
    ``max_shrink_steps`` steps.

    Every call to the predicate is wrapped in the same hooks as the attempts
    which found the failure, so fixtures are set up and torn down for each
    candidate we try.
    """

    def __init__(
        self,
        tree: CandidateTree[Any],
        failure: BaseException,
        predicate: Callable[[Any], Outcome],
        *,
        max_shrink_steps: int,
        hooks: Hooks = NO_HOOKS,
    ):
        assert max_shrink_steps >= 0
        self.current = tree
        self.failure = failure
        self.predicate = predicate
        self.hooks = hooks
        self.max_shrink_steps = max_shrink_steps
        self.n_shrink_steps = 0
        self.calls = 0

    def shrink(self) -> ShrinkResult:
        verbose_report("Shrinking...")
        while self.n_shrink_steps < self.max_shrink_steps:
            if not self.step():
                break
        else:
            if self.max_shrink_steps == 0:
                verbose_report("(Note: Shrinking is disabled, max_shrink_steps=0.)")
            else:
                verbose_report(
                    f"(Note: Exceeded {self.max_shrink_steps} shrinking steps, "
                    "the maximum.)"
                )
        return ShrinkResult(
            value=self.current.root,
            failure=self.failure,
            n_shrink_steps=self.n_shrink_steps,
            calls=self.calls,
        )

    def step(self) -> bool:
        """Try to move to the first failing child of the current node, and
        report whether we managed to."""
        attempts = (partial(self.try_child, c) for c in self.current.children)
        for attempt in self.hooks.wrap_attempts(attempts):
            child, outcome = attempt()
            if outcome.failed:
                self.current = child
                self.failure = outcome.failure
                self.n_shrink_steps += 1
                verbose_report(lambda: f"Shrunk to {child.root!r}")
                return True
        return False

    def try_child(self, child):
        self.calls += 1
        return child, self.predicate(child.root)
