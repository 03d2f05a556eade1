# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import threading
from contextlib import contextmanager


class DynamicVariable:
    def __init__(self, default):
        self.default = default
        self.data = threading.local()

    @property
    def value(self):
        return getattr(self.data, "value", self.default)

    @contextmanager
    def with_value(self, value):
        # Leaving the outermost scope must fall back to ``default`` again,
        # which may have been changed in the meantime.
        had_value = hasattr(self.data, "value")
        old_value = self.value
        try:
            self.data.value = value
            yield
        finally:
            if had_value:
                self.data.value = old_value
            else:
                del self.data.value
