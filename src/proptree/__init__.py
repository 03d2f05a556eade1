# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Proptree is a library for property-based testing with integrated
shrinking.

Every generated input carries a lazy tree of simpler inputs, and when a
property fails, Proptree walks that tree to find a minimal input which still
makes it fail.
"""

from proptree.configuration import (
    Configuration,
    configure,
    default_configuration,
    load_profile,
    local_configuration,
    register_profile,
)
from proptree.core import FailureInfo, Property, forall
from proptree.hooks import Hooks
from proptree.version import __version__, __version_info__

__all__ = [
    "Configuration",
    "FailureInfo",
    "Hooks",
    "Property",
    "configure",
    "default_configuration",
    "forall",
    "load_profile",
    "local_configuration",
    "register_profile",
    "__version__",
    "__version_info__",
]
