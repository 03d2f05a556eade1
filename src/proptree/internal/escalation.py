# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import sys
import traceback
from inspect import getframeinfo
from pathlib import Path

import proptree


def belongs_to(package):
    if not hasattr(package, "__file__"):  # pragma: no cover
        return lambda filepath: False

    root = Path(package.__file__).resolve().parent
    cache = {}

    def accept(filepath):
        try:
            return cache[filepath]
        except KeyError:
            pass
        try:
            Path(filepath).resolve().relative_to(root)
            result = True
        except Exception:
            result = False
        cache[filepath] = result
        return result

    accept.__name__ = f"is_{package.__name__}_file"
    return accept


is_proptree_file = belongs_to(proptree)


def skip_exceptions_to_reraise():
    """Return a tuple of exceptions meaning 'skip this test', to re-raise.

    This is intended to cover the common test runners.
    """
    exceptions = set()
    # We use this sys.modules trick to avoid importing libraries -
    # you can't be an instance of a type from an unimported module!
    if "unittest" in sys.modules:
        exceptions.add(sys.modules["unittest"].SkipTest)
    if "_pytest" in sys.modules:
        exceptions.add(sys.modules["_pytest"].outcomes.Skipped)
    return tuple(sorted(exceptions, key=str))


def failure_exceptions_to_catch():
    """Return a tuple of exceptions meaning 'this property has failed', to
    catch.

    KeyboardInterrupt and SystemExit are deliberately absent: a request to
    terminate the process is never treated as a failure.
    """
    exceptions = [Exception]
    if "_pytest" in sys.modules:
        exceptions.append(sys.modules["_pytest"].outcomes.Failed)
    return tuple(exceptions)


def get_trimmed_traceback(exception=None):
    """Return the current traceback, minus any frames added by Proptree."""
    if exception is None:
        _, exception, tb = sys.exc_info()
    else:
        tb = exception.__traceback__
    # Avoid trimming the traceback if the error was raised inside Proptree.
    if tb is None or is_proptree_file(traceback.extract_tb(tb)[-1][0]):
        return tb
    while tb is not None and is_proptree_file(getframeinfo(tb.tb_frame)[0]):
        tb = tb.tb_next
    return tb
