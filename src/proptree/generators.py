# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Constructors for generators.

The engine itself only needs the :class:`Generator` interface; this module
provides the combinators every property needs, plus a handful of simple
value generators to build on.
"""

from typing import Any, Callable, Mapping, Sequence, TypeVar

from proptree.errors import InvalidArgument
from proptree.internal.generator import (
    FixedDictGenerator,
    FunctionGenerator,
    Generator,
    TupleGenerator,
    check_generator,
)
from proptree.internal.lazytree import CandidateTree
from proptree.internal.primitives import (
    BooleansGenerator,
    IntegersGenerator,
    JustGenerator,
    ListGenerator,
)
from proptree.internal.validation import (
    check_type,
    check_valid_bound,
    check_valid_interval,
    check_valid_sizes,
)

__all__ = [
    "Generator",
    "booleans",
    "constant",
    "fixed_dictionaries",
    "fixed_hash",
    "from_trees",
    "integers",
    "just",
    "lists",
    "one_of",
    "sampled_from",
    "tuples",
]

T = TypeVar("T")


def just(value: T) -> Generator[T]:
    """Return a generator which only generates ``value``, and which never
    shrinks."""
    return JustGenerator(value)


constant = just


def integers(min_value: "int | None" = None, max_value: "int | None" = None):
    """Returns a generator which generates integers.

    If min_value is not None then all values will be >= min_value. If
    max_value is not None then all values will be <= max_value.

    Values shrink towards zero, or towards whichever bound is closest to zero
    if zero is out of range.
    """
    check_valid_bound(min_value, "min_value")
    check_valid_bound(max_value, "max_value")
    check_valid_interval(min_value, max_value, "min_value", "max_value")
    return IntegersGenerator(min_value, max_value)


def booleans() -> Generator[bool]:
    """Returns a generator which generates instances of :class:`bool`.

    ``True`` shrinks to ``False``.
    """
    return BooleansGenerator()


def sampled_from(elements: Sequence[T]) -> Generator[T]:
    """Returns a generator which generates any value present in ``elements``.

    Values shrink towards earlier elements.
    """
    values = tuple(elements)
    if not values:
        raise InvalidArgument("Cannot sample from a length-zero sequence.")
    return integers(0, len(values) - 1).map(values.__getitem__)


def lists(
    elements: Generator[T], *, min_size: int = 0, max_size: "int | None" = None
) -> Generator[list]:
    """Returns a generator for lists whose elements are drawn from
    ``elements``, with a length between ``min_size`` and ``max_size``.

    The longest lists grow with the size parameter, so early runs see short
    lists.
    """
    check_generator(elements, "elements")
    check_valid_sizes(min_size, max_size)
    return ListGenerator(elements, min_size=min_size, max_size=max_size)


def tuples(*args: Generator[Any]) -> Generator[tuple]:
    """Return a generator which generates a tuple of the same length as args
    by generating the value at index i from args[i].

    Components shrink one at a time, first component first.
    """
    for i, arg in enumerate(args):
        check_generator(arg, f"args[{i}]")
    return TupleGenerator(args)


def fixed_dictionaries(mapping: Mapping[Any, Generator[Any]]) -> Generator[dict]:
    """Generates a dictionary of the same type as mapping with a fixed set of
    keys mapping to generators. ``mapping`` must be a dict subclass.

    Values shrink one key at a time, in the order the keys were declared.
    """
    check_type(dict, mapping, "mapping")
    for k, v in mapping.items():
        check_generator(v, f"mapping[{k!r}]")
    return FixedDictGenerator(mapping)


fixed_hash = fixed_dictionaries


def one_of(*generators: Generator[Any]) -> Generator[Any]:
    """Return a generator which generates values from any of the argument
    generators.

    Shrinking prefers switching to an earlier generator before shrinking
    within the chosen one.
    """
    if not generators:
        raise InvalidArgument("one_of requires at least one generator")
    for i, arg in enumerate(generators):
        check_generator(arg, f"generators[{i}]")
    if len(generators) == 1:
        return generators[0]
    return integers(0, len(generators) - 1).bind(generators.__getitem__)


def from_trees(function: Callable[[int, Any], CandidateTree[T]]) -> Generator[T]:
    """Build a generator from a function ``function(size, random)`` returning
    a :class:`~proptree.internal.lazytree.CandidateTree`.

    This is the escape hatch for values whose shrinking the combinators above
    cannot express.
    """
    if not callable(function):
        raise InvalidArgument(f"Expected a callable but got function={function!r}")
    return FunctionGenerator(function)
