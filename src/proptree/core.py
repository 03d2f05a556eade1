# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""This module provides the core primitives of Proptree, such as forall."""

import io
import random as global_random
from enum import Enum
from functools import partial
from itertools import islice
from random import Random
from typing import Any, Callable, Hashable, Optional

import attr

from proptree.configuration import Configuration, default_configuration
from proptree.errors import FilterRejected, GeneratorExhausted, InvalidArgument
from proptree.generators import fixed_dictionaries, tuples
from proptree.hooks import NO_HOOKS, Hooks
from proptree.internal.compat import add_note
from proptree.internal.escalation import (
    failure_exceptions_to_catch,
    get_trimmed_traceback,
    skip_exceptions_to_reraise,
)
from proptree.internal.generator import Generator, check_generator
from proptree.internal.reflection import get_pretty_function_description, impersonate
from proptree.internal.shrinker import PASSED, Outcome, Shrinker
from proptree.reporting import (
    FailureReport,
    ShrinkReport,
    format_failure_report,
    format_shrink_report,
    verbose_report,
    with_verbosity,
)

__all__ = ["FailureInfo", "Property", "forall"]


class BindingStyle(Enum):
    SINGLE = "single"
    POSITIONAL = "positional"
    NAMED = "named"

    def __repr__(self) -> str:
        return f"BindingStyle.{self.name}"


def call_splatted(style, f, value):
    """Call ``f`` with ``value`` spread out the way its generators were bound:
    as positional arguments, keyword arguments, or a single argument."""
    if style is BindingStyle.NAMED:
        return f(**value)
    elif style is BindingStyle.POSITIONAL:
        return f(*value)
    return f(value)


def generator_from_bindings(bindings, kwbindings):
    if bindings and kwbindings:
        raise InvalidArgument(
            "Attempted to use both positional and keyword bindings at the same "
            "time. Bind every generator by position, or every generator by name."
        )
    if kwbindings:
        return fixed_dictionaries(dict(kwbindings)), BindingStyle.NAMED
    if len(bindings) == 1:
        check_generator(bindings[0], "bindings[0]")
        return bindings[0], BindingStyle.SINGLE
    return tuples(*bindings), BindingStyle.POSITIONAL


@attr.s(slots=True, frozen=True)
class FailureInfo:
    """Diagnostics attached to every exception re-raised by a failing
    property, as its ``proptree_info`` attribute."""

    original_input: Any = attr.ib()
    original_failure_message: str = attr.ib()
    shrunk_input: Any = attr.ib()
    shrunk_failure: BaseException = attr.ib()
    n_successful: int = attr.ib()
    n_shrink_steps: int = attr.ib()


@attr.s(slots=True, frozen=True)
class Property:
    """A property to check: generators to draw inputs from, a configuration,
    and fixture hooks.

    Properties are immutable. Every method which configures one returns a
    new property and leaves the original untouched, so a partially
    configured property can be shared and reused as a template between
    tests::

        with_db = Property().around(transaction).with_config(n_runs=50)

        @with_db.with_bindings(integers(), integers())
        def test_addition_commutes(x, y):
            assert add(x, y) == add(y, x)
    """

    generator: Optional[Generator[Any]] = attr.ib(default=None)
    binding_style: BindingStyle = attr.ib(default=BindingStyle.SINGLE)
    configuration: Configuration = attr.ib(factory=default_configuration)
    hooks: Hooks = attr.ib(default=NO_HOOKS)
    seed: Optional[Hashable] = attr.ib(default=None)

    @classmethod
    def forall(cls, *bindings: Generator[Any], **kwbindings: Generator[Any]):
        """Create a property over the given generators.

        Generators may be bound by position, in which case the body receives
        one positional argument per generator, or by name, in which case it
        receives keyword arguments. Mixing the two is not allowed.
        """
        if not (bindings or kwbindings):
            return cls()
        return cls().with_bindings(*bindings, **kwbindings)

    def with_bindings(
        self, *bindings: Generator[Any], **kwbindings: Generator[Any]
    ) -> "Property":
        if not (bindings or kwbindings):
            raise InvalidArgument("No bindings specified!")
        generator, style = generator_from_bindings(bindings, kwbindings)
        return attr.evolve(self, generator=generator, binding_style=style)

    def with_config(
        self, configuration: Optional[Configuration] = None, **overrides: Any
    ) -> "Property":
        """Return a property whose configuration is this one's, overridden by
        the fields of ``configuration`` (if given) and then by ``overrides``.
        """
        return attr.evolve(
            self, configuration=self.configuration.merge(configuration, **overrides)
        )

    def with_seed(self, seed: Hashable) -> "Property":
        """Start every check of the returned property from the same seed, so
        that it always tries the same inputs."""
        return attr.evolve(self, seed=seed)

    def where(self, condition: Callable[..., Any]) -> "Property":
        """Only run the property on inputs satisfying ``condition``, which
        receives the inputs exactly as the body does.

        Filtering away too many inputs results in
        :class:`~proptree.errors.GeneratorExhausted`. Only filter if you have
        few inputs to reject; otherwise, improve your generators.

        ``condition`` is also called on shrink candidates. If it raises there,
        that exception escapes the check with the original failure, report
        notes included, as its ``__cause__``.
        """
        if self.generator is None:
            raise InvalidArgument(
                "No generator bindings specified! where() should be called "
                "after forall() or with_bindings()."
            )
        if not callable(condition):
            raise InvalidArgument(
                f"Expected a callable but got condition={condition!r}"
            )
        style = self.binding_style

        def splatted_condition(value):
            return call_splatted(style, condition, value)

        splatted_condition.__name__ = get_pretty_function_description(condition)
        return attr.evolve(self, generator=self.generator.where(splatted_condition))

    def before(self, hook: Callable[[], object]) -> "Property":
        """Call ``hook`` before every attempt, including the attempts made
        while shrinking. Earlier hooks run first."""
        return attr.evolve(self, hooks=self.hooks.add_before(hook))

    def after(self, hook: Callable[[], object]) -> "Property":
        """Call ``hook`` after every attempt, even a failing one. Earlier
        hooks run first."""
        return attr.evolve(self, hooks=self.hooks.add_after(hook))

    def around(self, hook: Callable[[], object]) -> "Property":
        """Wrap every attempt in ``hook``, which is either a generator
        function yielding once or a callable returning a context manager.

        Around hooks run after all before hooks and before all after hooks.
        Earlier around hooks wrap later ones. If the attempt raises, code
        after the ``yield`` only runs if it is in a ``finally`` block.
        """
        return attr.evolve(self, hooks=self.hooks.add_around(hook))

    def check(self, body: Callable[..., Any]) -> None:
        """Run ``body`` against generated inputs until it has passed
        ``n_runs`` times, or until it fails.

        On failure the input is shrunk, and the exception the body raised on
        the original input is re-raised with the details attached.
        """
        __tracebackhide__ = True
        if self.generator is None:
            raise InvalidArgument(
                "No generator bindings specified! Use forall() or "
                "with_bindings() before checking a property."
            )
        if not callable(body):
            raise InvalidArgument(f"Expected a callable but got body={body!r}")
        PropertyRun(self, body).run()

    def __call__(self, body: Callable[..., Any]) -> Callable[[], None]:
        """Use the property as a decorator: the decorated function becomes a
        test, taking no arguments, which checks the property against it."""
        if not callable(body):
            raise InvalidArgument(
                f"A Property can only decorate callables, not {body!r}"
            )

        @impersonate(body)
        def run_property():
            __tracebackhide__ = True
            self.check(body)

        run_property.proptree_property = self
        return run_property

    def random_for_check(self) -> Random:
        if self.seed is not None:
            return Random(self.seed)
        return Random(global_random.getrandbits(128))


forall = Property.forall


class PropertyRun:
    """The mutable state of a single ``Property.check`` call. Nothing here is
    shared between calls, so one property can be checked many times, and
    from several threads at once."""

    def __init__(self, prop: Property, body: Callable[..., Any]):
        self.property = prop
        self.body = body
        self.configuration = prop.configuration
        self.random = prop.random_for_check()
        self.size = 1
        self.n_generate_attempts = 0
        self.n_rejected = 0
        self.n_runs_performed = 0
        self.n_successful = 0

    def run(self) -> None:
        __tracebackhide__ = True
        config = self.configuration
        with with_verbosity(config.verbose):
            attempts = self.property.hooks.wrap_attempts(self.raw_attempts())
            for attempt in islice(attempts, config.n_runs):
                self.n_runs_performed += 1
                tree, outcome = attempt()
                if outcome.failed:
                    self.fail(tree, outcome.failure)
                self.n_successful += 1

        if self.n_runs_performed < config.n_runs:
            raise GeneratorExhausted(
                config.n_runs,
                config.max_generate_attempts,
                n_runs_performed=self.n_runs_performed,
            )

    def raw_attempts(self):
        """Generate an input for each of up to ``max_generate_attempts``
        attempts, yielding a callable which runs the body on it.

        The size grows by one for every attempt, whether or not the input
        was rejected by a filter. A rejected input uses up one attempt.
        """
        config = self.configuration
        generator = self.property.generator
        for _ in range(config.max_generate_attempts):
            size = self.size
            self.size += 1
            self.n_generate_attempts += 1
            try:
                tree = generator.generate(
                    size, self.random, config.max_consecutive_attempts
                )
            except FilterRejected as e:
                self.n_rejected += 1
                verbose_report(lambda: f"Rejected attempt at size={size}: {e}")
                continue
            yield partial(self.run_attempt, tree)

    def run_attempt(self, tree):
        return tree, self.test(tree.root)

    def test(self, value) -> Outcome:
        """Run the body on ``value``, turning any failure into an Outcome.

        Test-runner skips, KeyboardInterrupt and SystemExit are not failures
        and propagate untouched.
        """
        try:
            call_splatted(self.property.binding_style, self.body, value)
        except skip_exceptions_to_reraise():
            raise
        except failure_exceptions_to_catch() as e:
            return Outcome.failing(e)
        return PASSED

    def fail(self, tree, failure):
        __tracebackhide__ = True
        output = io.StringIO()

        def emit(text):
            output.write(text)
            verbose_report(text)

        emit(
            format_failure_report(
                FailureReport(
                    n_successful=self.n_successful,
                    original_input=tree.root,
                    failure=failure,
                )
            )
        )
        shrinker = Shrinker(
            tree,
            failure,
            self.test,
            max_shrink_steps=self.configuration.max_shrink_steps,
            hooks=self.property.hooks,
        )
        try:
            result = shrinker.shrink()
        except failure_exceptions_to_catch() as err:
            # Something outside the body raised on a shrunk candidate, such as a
            # where condition or bind function.
            add_note(failure, output.getvalue())
            add_note(
                err,
                f"Raised while shrinking the failing input {tree.root!r}, "
                f"which failed with {failure!r}",
            )
            raise err from failure
        emit(
            format_shrink_report(
                ShrinkReport(
                    n_shrink_steps=result.n_shrink_steps,
                    shrunk_input=result.value,
                    shrunk_failure=result.failure,
                )
            )
        )

        info = FailureInfo(
            original_input=tree.root,
            original_failure_message=str(failure),
            shrunk_input=result.value,
            shrunk_failure=result.failure,
            n_successful=self.n_successful,
            n_shrink_steps=result.n_shrink_steps,
        )
        try:
            failure.proptree_info = info
        except AttributeError:  # pragma: no cover
            pass  # e.g. an exception class with __slots__
        add_note(failure, output.getvalue())
        raise failure.with_traceback(get_trimmed_traceback(failure))
