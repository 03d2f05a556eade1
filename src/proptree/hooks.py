# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Fixture hooks which run around every single attempt of a property, both
while searching for a failure and while shrinking one."""

import contextlib
import inspect
from typing import Callable, Iterable, Iterator, Tuple, TypeVar

import attr

from proptree.errors import InvalidArgument
from proptree.internal.compat import BaseExceptionGroup
from proptree.internal.reflection import get_pretty_function_description

T = TypeVar("T")


def _check_hook(hook, kind):
    if not callable(hook):
        raise InvalidArgument(
            f"{kind} hooks must be callable, but got {hook!r} "
            f"(type={type(hook).__name__})"
        )


def _context_manager_factory(hook):
    if inspect.isgeneratorfunction(hook):
        return contextlib.contextmanager(hook)
    return hook


@attr.s(slots=True, frozen=True)
class Hooks:
    """An immutable registry of ``before``, ``around`` and ``after`` hooks.

    For every attempt, all before hooks run, oldest first. Then the around
    hooks wrap the attempt, the oldest outermost. Finally all after hooks
    run, oldest first, even if the attempt or an around hook raised.

    An around hook is either a generator function which yields exactly once
    (where the attempt should happen), or any callable returning a context
    manager.
    """

    before: Tuple[Callable[[], object], ...] = attr.ib(default=())
    around: Tuple[Callable[[], object], ...] = attr.ib(default=())
    after: Tuple[Callable[[], object], ...] = attr.ib(default=())

    def add_before(self, hook: Callable[[], object]) -> "Hooks":
        _check_hook(hook, "before")
        return attr.evolve(self, before=self.before + (hook,))

    def add_around(self, hook: Callable[[], object]) -> "Hooks":
        _check_hook(hook, "around")
        factory = _context_manager_factory(hook)
        return attr.evolve(self, around=self.around + (factory,))

    def add_after(self, hook: Callable[[], object]) -> "Hooks":
        _check_hook(hook, "after")
        return attr.evolve(self, after=self.after + (hook,))

    def __bool__(self):
        return bool(self.before or self.around or self.after)

    def wrap(self, attempt: Callable[..., T]) -> Callable[..., T]:
        """Return a function which calls ``attempt`` inside all the hooks."""
        if not self:
            return attempt

        def wrapped(*args, **kwargs):
            for hook in self.before:
                hook()
            try:
                with contextlib.ExitStack() as stack:
                    for factory in self.around:
                        stack.enter_context(factory())
                    result = attempt(*args, **kwargs)
            except BaseException as e:
                self._run_after(cause=e)
                raise
            self._run_after(cause=None)
            return result

        wrapped.__name__ = "hooked_" + get_pretty_function_description(attempt)
        return wrapped

    def wrap_attempts(
        self, attempts: Iterable[Callable[..., T]]
    ) -> Iterator[Callable[..., T]]:
        """Lazily wrap each attempt in ``attempts`` with ``wrap``."""
        for attempt in attempts:
            yield self.wrap(attempt)

    def _run_after(self, cause):
        errors = []
        for hook in self.after:
            try:
                hook()
            except Exception as err:
                errors.append(err)
        if len(errors) == 1:
            raise errors[0] from cause
        elif errors:
            raise BaseExceptionGroup(
                f"{len(errors)} after hooks failed", errors
            ) from cause


NO_HOOKS = Hooks()
