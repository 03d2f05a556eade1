# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import codecs

try:
    BaseExceptionGroup = BaseExceptionGroup
except NameError:  # pragma: no cover
    from exceptiongroup import BaseExceptionGroup as BaseExceptionGroup


def escape_unicode_characters(s):
    return codecs.encode(s, "unicode_escape").decode("ascii")


def add_note(exc, note):
    """Attach ``note`` to ``exc`` as a PEP 678 note.

    Interpreters older than 3.11 have no ``add_note`` method, so we fall back
    to appending to ``__notes__`` directly; the exceptiongroup backport knows
    how to display those in tracebacks.
    """
    try:
        exc.add_note(note)
    except AttributeError:
        if not hasattr(exc, "__notes__"):
            try:
                exc.__notes__ = []
            except AttributeError:
                return  # give up, might be e.g. a frozen dataclass
        exc.__notes__.append(note)
