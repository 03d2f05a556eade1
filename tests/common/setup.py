# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import os
from warnings import filterwarnings

import attr

from proptree import configuration as configuration_module
from proptree.configuration import Configuration, load_profile, register_profile


def run():
    filterwarnings("error")
    filterwarnings("ignore", category=ImportWarning)

    # We do a smoke test here before we mess around with the configuration.
    default = configuration_module.default_configuration()
    for name, value in attr.asdict(Configuration()).items():
        assert getattr(default, name) == value, (name, value)

    register_profile("speedy", n_runs=10, max_shrink_steps=100)
    register_profile("debug", verbose=True)

    load_profile(os.getenv("PROPTREE_PROFILE", "default"))
