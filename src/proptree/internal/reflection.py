# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""This file can approximately be considered the collection of hacks we need
to make the functions users hand us look presentable, in reprs and in the
failure reports."""

import ast
import inspect
import textwrap
import tokenize
import types
from collections.abc import Callable, MutableMapping
from functools import lru_cache, partial
from inspect import Parameter, Signature
from weakref import WeakKeyDictionary

LAMBDA_DESCRIPTION_CACHE: MutableMapping[Callable, str] = WeakKeyDictionary()


def ast_arguments_matches_signature(args: ast.arguments, sig: Signature) -> bool:
    expected: list = []
    for node in args.posonlyargs:
        expected.append((node.arg, Parameter.POSITIONAL_ONLY))
    for node in args.args:
        expected.append((node.arg, Parameter.POSITIONAL_OR_KEYWORD))
    if args.vararg is not None:
        expected.append((args.vararg.arg, Parameter.VAR_POSITIONAL))
    for node in args.kwonlyargs:
        expected.append((node.arg, Parameter.KEYWORD_ONLY))
    if args.kwarg is not None:
        expected.append((args.kwarg.arg, Parameter.VAR_KEYWORD))
    return expected == [(p.name, p.kind) for p in sig.parameters.values()]


@lru_cache(maxsize=100)
def _lambdas_in(source):
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return ()
    return tuple(node for node in ast.walk(tree) if isinstance(node, ast.Lambda))


def _lambda_source_key(f):
    code = f.__code__
    return (
        repr(code.co_consts),
        inspect.signature(f),
        code.co_names,
        code.co_code,
        code.co_varnames,
        code.co_freevars,
    )


def _mimic_lambda_from_source(f, source):
    if f.__closure__ is None:
        return eval(source, f.__globals__)
    # The free variables only need to be bound to *something* for the code to
    # come out the same, so reuse the lambda's own cells.
    closure = {f"___fv{i}": c.cell_contents for i, c in enumerate(f.__closure__)}
    assigns = [f"{name}=___fv{i}" for i, name in enumerate(f.__code__.co_freevars)]
    fake_globals = f.__globals__ | closure
    exec(f"def construct(): {';'.join(assigns)}; return ({source})", fake_globals)
    return fake_globals["construct"]()


def _lambda_code_matches_source(f, source):
    try:
        compiled = _mimic_lambda_from_source(f, source)
    except (NameError, SyntaxError, ValueError):
        return False
    return _lambda_source_key(f) == _lambda_source_key(compiled)


def _lambda_description(f):
    sig = inspect.signature(f)

    def format_lambda(body):
        return (
            f"lambda {str(sig)[1:-1]}: {body}" if sig.parameters else f"lambda: {body}"
        )

    if_confused = format_lambda("<unknown>")

    try:
        source_lines, lineno0 = inspect.findsource(f)
    except (OSError, TypeError):
        return if_confused

    # The statement the lambda starts on is usually enough to find it, and much
    # cheaper to parse than the whole module. A lambda in the middle of a
    # chained call starts its block with a dot, which we drop.
    try:
        block = textwrap.dedent("".join(inspect.getblock(source_lines[lineno0:])))
    except (SyntaxError, tokenize.TokenError):
        block = ""
    if block.startswith("."):
        block = block[1:]

    for source, lineno in [(block, 1), ("".join(source_lines), lineno0 + 1)]:
        candidates = {
            format_lambda(ast.unparse(node.body))
            for node in _lambdas_in(source)
            if node.lineno <= lineno <= node.end_lineno
            and ast_arguments_matches_signature(node.args, sig)
        }
        if len(candidates) == 1:
            (description,) = candidates
            return description
        for description in sorted(candidates):
            if _lambda_code_matches_source(f, description):
                return description
    return if_confused


def lambda_description(f):
    """Returns an expression describing the lambda ``f``: usually, but not
    always, the text of the lambda as it appears in the source code."""
    try:
        return LAMBDA_DESCRIPTION_CACHE[f]
    except KeyError:
        pass
    description = _lambda_description(f)
    LAMBDA_DESCRIPTION_CACHE[f] = description
    return description


def get_pretty_function_description(f: object) -> str:
    if isinstance(f, partial):
        return "partial(%s)" % (get_pretty_function_description(f.func),)
    if not hasattr(f, "__name__"):
        return repr(f)
    name = f.__name__  # type: ignore
    if name == "<lambda>":
        return lambda_description(f)
    elif isinstance(f, (types.MethodType, types.BuiltinMethodType)):
        self = f.__self__
        if not (self is None or inspect.isclass(self) or inspect.ismodule(self)):
            return f"{self!r}.{name}"
    return name


def is_identity_function(f) -> bool:
    try:
        code = f.__code__
    except AttributeError:
        return False

    # We only accept a single unbound argument whose body is simply
    # "return first argument".
    if code.co_argcount != 1 or code.co_kwonlyargcount > 0:
        return False
    return code.co_code == (lambda x: x).__code__.co_code


def impersonate(target):
    """Decorator to update the attributes of a function so that to test
    runners it will appear to be the target function.

    Unlike ``functools.wraps`` this does not set ``__wrapped__``, so that
    introspectors see the signature of the wrapper rather than of the target.
    """

    def accept(f):
        f.__name__ = getattr(target, "__name__", f.__name__)
        f.__qualname__ = getattr(target, "__qualname__", f.__qualname__)
        f.__module__ = getattr(target, "__module__", f.__module__)
        f.__doc__ = getattr(target, "__doc__", None)
        return f

    return accept
