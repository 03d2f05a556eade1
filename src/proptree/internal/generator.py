# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from random import Random
from typing import Any, Callable, Generic, List, TypeVar

from proptree.errors import FilterRejected, InvalidArgument
from proptree.internal.lazytree import CandidateTree, combine
from proptree.internal.reflection import (
    get_pretty_function_description,
    is_identity_function,
)
from proptree.internal.validation import check_positive_integer, check_type

Ex = TypeVar("Ex", covariant=True)
T = TypeVar("T")

DEFAULT_MAX_CONSECUTIVE_ATTEMPTS = 30


class Generator(Generic[Ex]):
    """A Generator is an object that knows how to produce candidate trees:
    a random value of some type, together with a lazy tree of simpler values
    to try when that value turns out to make a property fail.

    Except where noted otherwise, methods on this class are not part of the
    public API and their behaviour may change significantly between minor
    version releases. They will generally be stable between patch releases.
    """

    def generate(
        self,
        size: int,
        random: Random,
        max_consecutive_attempts: int = DEFAULT_MAX_CONSECUTIVE_ATTEMPTS,
    ) -> CandidateTree[Ex]:
        """Produce a candidate tree. ``size`` biases the magnitude of the
        values produced, and ``max_consecutive_attempts`` bounds the number
        of draws a filtered generator may make before giving up with
        :class:`~proptree.errors.FilterRejected`.

        Given the same state of ``random`` and the same arguments, the
        resulting tree is always the same.
        """
        check_positive_integer(size, "size")
        check_positive_integer(max_consecutive_attempts, "max_consecutive_attempts")
        return self.do_generate(size, random, max_consecutive_attempts)

    def do_generate(
        self, size: int, random: Random, max_consecutive_attempts: int
    ) -> CandidateTree[Ex]:
        raise NotImplementedError(f"{type(self).__name__}.do_generate")

    def example(self, size: int = 10, random: "Random | None" = None) -> Ex:
        """Provide an example of the sort of value that this generator
        produces.

        This method is designed for use in a REPL, and will raise
        :class:`~proptree.errors.FilterRejected` if the generator's
        conditions could not be satisfied.
        """
        if random is None:
            random = Random()
        return self.generate(size, random).root

    def sample(
        self, n: int = 10, size: int = 10, random: "Random | None" = None
    ) -> List[Ex]:
        if random is None:
            random = Random()
        return [self.example(size, random) for _ in range(n)]

    def map(self, pack: Callable[[Ex], T]) -> "Generator[T]":
        """Returns a new generator that generates values by generating a value
        from this one, say x, then returning pack(x).

        Shrinking happens on the underlying values, and each shrink candidate
        is passed through ``pack`` as it is needed.
        """
        if is_identity_function(pack):
            return self  # type: ignore
        return MappedGenerator(self, pack)

    def bind(self, expand: "Callable[[Ex], Generator[T]]") -> "Generator[T]":
        """Returns a new generator that generates values by generating a value
        from this one, say x, then generating a value from
        ``expand(x)``.

        When shrinking, simpler values of x are tried first, each with a fresh
        value drawn from ``expand`` of it, and only then are simpler values of
        the inner value tried with x held fixed.

        Like ``where`` conditions, ``expand`` is also called on shrink
        candidates, and an exception it raises there ends the check.
        """
        return BoundGenerator(self, expand)

    flatmap = bind

    def where(self, condition: Callable[[Ex], Any]) -> "Generator[Ex]":
        """Returns a new generator that generates values from this one which
        satisfy the provided condition.

        Shrink candidates which do not satisfy the condition are silently
        skipped. If ``max_consecutive_attempts`` draws in a row fail to
        satisfy the condition, ``generate`` raises
        :class:`~proptree.errors.FilterRejected`.

        The condition is also called on every shrink candidate. An exception
        it raises there is propagated out of the check, chained from the
        original failure.
        """
        return FilteredGenerator(self, conditions=(condition,))

    filter = where

    def __repr__(self):
        return f"{type(self).__name__}()"


class FunctionGenerator(Generator[Ex]):
    """A generator defined by a function of ``(size, random)`` returning a
    :class:`~proptree.internal.lazytree.CandidateTree`."""

    def __init__(self, function):
        self.function = function

    def do_generate(self, size, random, max_consecutive_attempts):
        tree = self.function(size, random)
        if not isinstance(tree, CandidateTree):
            raise InvalidArgument(
                f"{get_pretty_function_description(self.function)} returned "
                f"{tree!r}, which is not a CandidateTree"
            )
        return tree

    def __repr__(self):
        return f"from_trees({get_pretty_function_description(self.function)})"


class MappedGenerator(Generator[Ex]):
    def __init__(self, generator, pack):
        self.mapped_generator = generator
        self.pack = pack

    def do_generate(self, size, random, max_consecutive_attempts):
        tree = self.mapped_generator.generate(size, random, max_consecutive_attempts)
        return tree.map(self.pack)

    def __repr__(self):
        return (
            f"{self.mapped_generator!r}"
            f".map({get_pretty_function_description(self.pack)})"
        )


class BoundGenerator(Generator[Ex]):
    def __init__(self, generator, expand):
        self.base = generator
        self.expand = expand

    def do_generate(self, size, random, max_consecutive_attempts):
        def inner(value):
            expanded = self.expand(value)
            if not isinstance(expanded, Generator):
                raise InvalidArgument(
                    f"Expected {get_pretty_function_description(self.expand)} "
                    f"to return a Generator but got {expanded!r} "
                    f"(type={type(expanded).__name__})"
                )
            return expanded.generate(size, random, max_consecutive_attempts)

        tree = self.base.generate(size, random, max_consecutive_attempts)
        return tree.bind(inner)

    def __repr__(self):
        return f"{self.base!r}.bind({get_pretty_function_description(self.expand)})"


class FilteredGenerator(Generator[Ex]):
    def __init__(self, generator, conditions):
        if isinstance(generator, FilteredGenerator):
            # Flatten chained filters, so that a value only has to survive
            # one retry loop rather than one per condition.
            self.conditions = generator.conditions + tuple(conditions)
            self.filtered_generator = generator.filtered_generator
        else:
            self.conditions = tuple(conditions)
            self.filtered_generator = generator

        assert isinstance(self.conditions, tuple)
        assert not isinstance(self.filtered_generator, FilteredGenerator)

    def condition(self, value):
        return all(cond(value) for cond in self.conditions)

    def do_generate(self, size, random, max_consecutive_attempts):
        for _ in range(max_consecutive_attempts):
            tree = self.filtered_generator.generate(
                size, random, max_consecutive_attempts
            )
            if self.condition(tree.root):
                return tree.filter(self.condition)
        raise FilterRejected(self._condition_description(), max_consecutive_attempts)

    def _condition_description(self):
        return " and ".join(
            get_pretty_function_description(cond) for cond in self.conditions
        )

    def __repr__(self):
        return "{!r}{}".format(
            self.filtered_generator,
            "".join(
                f".where({get_pretty_function_description(cond)})"
                for cond in self.conditions
            ),
        )


class TupleGenerator(Generator[tuple]):
    """A generator responsible for fixed length tuples based on heterogeneous
    generators for each of their elements.

    Components are drawn in order from the same random source, and shrink
    one coordinate at a time, the first coordinate first.
    """

    def __init__(self, generators):
        self.element_generators = tuple(generators)

    def do_generate(self, size, random, max_consecutive_attempts):
        trees = [
            g.generate(size, random, max_consecutive_attempts)
            for g in self.element_generators
        ]
        return combine(tuple, trees)

    def __repr__(self):
        if len(self.element_generators) == 1:
            tuple_string = f"{self.element_generators[0]!r},"
        else:
            tuple_string = ", ".join(map(repr, self.element_generators))
        return f"tuples({tuple_string})"


class FixedDictGenerator(Generator[dict]):
    """A generator for dictionaries with a fixed set of keys, each with its
    own generator. Keys are drawn, and shrunk, in declaration order."""

    def __init__(self, mapping):
        self.keys = tuple(mapping)
        self.value_generators = tuple(mapping[k] for k in self.keys)

    def do_generate(self, size, random, max_consecutive_attempts):
        trees = [
            g.generate(size, random, max_consecutive_attempts)
            for g in self.value_generators
        ]
        keys = self.keys
        return combine(lambda roots: dict(zip(keys, roots)), trees)

    def __repr__(self):
        return "fixed_dictionaries({%s})" % (
            ", ".join(f"{k!r}: {g!r}" for k, g in zip(self.keys, self.value_generators)),
        )


def check_generator(arg, name=""):
    check_type(Generator, arg, name or "generator")
