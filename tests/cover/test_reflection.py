# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import gc
import inspect
import weakref
from functools import partial

from proptree import forall
from proptree.generators import integers
from proptree.internal.reflection import (
    get_pretty_function_description,
    impersonate,
    is_identity_function,
)


def test_describes_named_functions_by_name():
    def hello(x):
        return x

    assert get_pretty_function_description(hello) == "hello"
    assert get_pretty_function_description(len) == "len"


def test_describes_lambdas_by_their_source():
    f = lambda x, y: x + y  # noqa: E731
    assert get_pretty_function_description(f) == "lambda x, y: x + y"


def test_lambda_in_a_call_stops_at_the_closing_bracket():
    descriptions = list(map(get_pretty_function_description, [lambda x: (x, 1)]))
    assert descriptions == ["lambda x: (x, 1)"]


def test_describes_the_right_lambda_when_a_line_has_several():
    g = integers().map(lambda x: x + 1).where(lambda y: y > 0)
    assert repr(g) == "integers().map(lambda x: x + 1).where(lambda y: y > 0)"


def test_tells_apart_lambdas_with_the_same_signature_on_one_line():
    g = integers().map(lambda x: x + 1).where(lambda x: x > 0)
    assert repr(g) == "integers().map(lambda x: x + 1).where(lambda x: x > 0)"


def test_describes_lambdas_spanning_several_lines():
    f = (
        lambda x:
        x
        + 1
    )
    assert get_pretty_function_description(f) == "lambda x: x + 1"


def test_describing_lambdas_does_not_keep_them_alive():
    def bigger_than(i):
        return lambda x: x > i

    conditions = [bigger_than(i) for i in range(50)]
    for condition in conditions:
        repr(forall(integers()).where(condition))
        get_pretty_function_description(condition)
    refs = [weakref.ref(condition) for condition in conditions]
    del conditions, condition
    gc.collect()
    assert all(ref() is None for ref in refs)


def test_describes_partials():
    def hello(x, y):
        return x

    assert get_pretty_function_description(partial(hello, 1)) == "partial(hello)"


def test_describes_bound_methods_with_their_instance():
    assert get_pretty_function_description([].append) == "[].append"


def test_describes_non_functions_by_repr():
    class Thing:
        def __call__(self):
            pass

        def __repr__(self):
            return "Thing()"

    assert get_pretty_function_description(Thing()) == "Thing()"


def test_recognises_identity_functions():
    def identity(value):
        return value

    assert is_identity_function(lambda x: x)
    assert is_identity_function(identity)
    assert not is_identity_function(lambda x: 1)
    assert not is_identity_function(lambda x, y: x)
    assert not is_identity_function(str)


def test_impersonate_copies_identity_but_not_signature():
    def target(a, b):
        """The target."""

    @impersonate(target)
    def wrapper():
        pass

    assert wrapper.__name__ == "target"
    assert wrapper.__doc__ == "The target."
    assert wrapper.__qualname__ == target.__qualname__
    assert not hasattr(wrapper, "__wrapped__")
    assert list(inspect.signature(wrapper).parameters) == []
