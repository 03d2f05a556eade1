# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import random

import pytest

from proptree import configuration

from tests.common.setup import run

run()


@pytest.fixture(scope="function", autouse=True)
def _restore_default_configuration():
    """Tests which call ``configure`` or ``load_profile`` change the process
    wide default; put it back afterwards."""
    saved = configuration.default_variable.default
    yield
    configuration.default_variable.default = saved


random_states_after_tests = {}
independent_random = random.Random()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_call(item):
    # Every check draws its seed from the global PRNG, so a test which
    # finishes with the same global state as another one has most likely
    # reseeded it and is not exploring anything new.
    random.seed(independent_random.randrange(2**32))
    before = random.getstate()
    yield
    after = random.getstate()
    if before != after:
        if after in random_states_after_tests:
            raise Exception(
                f"{item.nodeid!r} and {random_states_after_tests[after]!r} "
                "both used the `random` module, and finished with the "
                "same global `random.getstate()`; this is probably a nasty bug!"
            )
        random_states_after_tests[after] = item.nodeid
