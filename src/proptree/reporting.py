# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import inspect
from typing import Any

import attr

from proptree.configuration import default_configuration
from proptree.internal.compat import escape_unicode_characters
from proptree.utils.dynamicvariables import DynamicVariable


def silent(value):
    pass


def default(value):
    try:
        print(value)
    except UnicodeEncodeError:
        print(escape_unicode_characters(value))


reporter = DynamicVariable(default)
_verbose = DynamicVariable(None)


def current_reporter():
    return reporter.value


def with_reporter(new_reporter):
    return reporter.with_value(new_reporter)


def with_verbosity(verbose):
    """Scope whether ``verbose_report`` emits, regardless of the default
    configuration. The property runner uses this for its own configuration."""
    return _verbose.with_value(verbose)


def current_verbosity() -> bool:
    verbose = _verbose.value
    if verbose is None:
        return default_configuration().verbose
    return verbose


def to_text(textish):
    if inspect.isfunction(textish):
        textish = textish()
    if isinstance(textish, bytes):
        textish = textish.decode()
    return textish


def verbose_report(text):
    if current_verbosity():
        current_reporter()(to_text(text))


def report(text):
    current_reporter()(to_text(text))


@attr.s(slots=True, frozen=True)
class FailureReport:
    """What we know about a failure before shrinking it."""

    n_successful: int = attr.ib()
    original_input: Any = attr.ib()
    failure: BaseException = attr.ib()


@attr.s(slots=True, frozen=True)
class ShrinkReport:
    """What we know about a failure once shrinking has finished."""

    n_shrink_steps: int = attr.ib()
    shrunk_input: Any = attr.ib()
    shrunk_failure: BaseException = attr.ib()


def _describe_exception(exc):
    message = str(exc)
    if message:
        return f"{type(exc).__name__}: {message}"
    return type(exc).__name__


def format_failure_report(failure_report: FailureReport) -> str:
    return "\n".join(
        [
            "",
            f"(after {failure_report.n_successful} successful property test runs)",
            "Failed on: ",
            f"`{failure_report.original_input!r}`",
            "",
            "Exception message:",
            "---",
            _describe_exception(failure_report.failure),
            "---",
            "",
        ]
    )


def format_shrink_report(shrink_report: ShrinkReport) -> str:
    if shrink_report.n_shrink_steps == 0:
        return "(shrinking impossible)\n"
    return "\n".join(
        [
            "",
            f"Shrunken input (after {shrink_report.n_shrink_steps} shrink steps):",
            f"`{shrink_report.shrunk_input!r}`",
            "",
            "Shrunken exception:",
            "---",
            _describe_exception(shrink_report.shrunk_failure),
            "---",
            "",
        ]
    )
