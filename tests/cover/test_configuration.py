# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import attr
import pytest

from proptree import (
    Configuration,
    configure,
    default_configuration,
    forall,
    load_profile,
    local_configuration,
    register_profile,
)
from proptree.configuration import get_profile
from proptree.errors import InvalidArgument


def test_has_documented_defaults():
    config = Configuration()
    assert config.verbose is False
    assert config.n_runs == 100
    assert config.max_generate_attempts == 10_000
    assert config.max_shrink_steps == 10_000
    assert config.max_consecutive_attempts == 30


def test_configurations_are_immutable():
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        Configuration().n_runs = 3


def test_merge_prefers_overrides():
    base = Configuration(n_runs=5, verbose=True)
    merged = base.merge(n_runs=7)
    assert merged == Configuration(n_runs=7, verbose=True)
    assert base.n_runs == 5


def test_merge_takes_every_field_of_the_other_configuration():
    base = Configuration(n_runs=5, verbose=True)
    merged = base.merge(Configuration(max_shrink_steps=3), n_runs=9)
    assert merged == Configuration(max_shrink_steps=3, n_runs=9)


def test_merge_rejects_unknown_settings():
    with pytest.raises(InvalidArgument):
        Configuration().merge(n_run=3)


def test_merge_rejects_non_configurations():
    with pytest.raises(InvalidArgument):
        Configuration().merge({"n_runs": 3})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_runs": 0},
        {"n_runs": -1},
        {"n_runs": 1.5},
        {"n_runs": True},
        {"max_generate_attempts": 0},
        {"max_shrink_steps": "many"},
        {"max_shrink_steps": -1},
        {"max_consecutive_attempts": 0},
        {"verbose": "yes"},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(InvalidArgument):
        Configuration(**kwargs)
    with pytest.raises(InvalidArgument):
        Configuration().merge(**kwargs)


def test_allows_shrinking_to_be_turned_off():
    assert Configuration(max_shrink_steps=0).max_shrink_steps == 0
    assert Configuration().merge(max_shrink_steps=0).max_shrink_steps == 0


def test_show_changed():
    assert Configuration().show_changed() == ""
    assert Configuration(n_runs=5).show_changed() == "n_runs=5"


def test_local_configuration_is_scoped():
    outer = default_configuration()
    inner = Configuration(n_runs=3)
    with local_configuration(inner) as config:
        assert config is inner
        assert default_configuration() is inner
        assert forall().configuration is inner
    assert default_configuration() is outer


def test_can_register_and_load_profiles():
    register_profile("test_profiles_few_runs", n_runs=5)
    load_profile("test_profiles_few_runs")
    assert default_configuration() == Configuration(n_runs=5)
    assert forall().configuration.n_runs == 5


def test_profiles_inherit_from_their_parent():
    parent = Configuration(verbose=True)
    register_profile("test_profiles_child", parent, n_runs=5)
    assert get_profile("test_profiles_child") == Configuration(verbose=True, n_runs=5)


def test_loading_an_unknown_profile_fails():
    with pytest.raises(InvalidArgument):
        load_profile("this profile was never registered")


def test_configure_changes_the_default():
    before = default_configuration()
    result = configure(max_shrink_steps=17)
    assert result == before.merge(max_shrink_steps=17)
    assert default_configuration() is result
    assert get_profile("default") == Configuration()


def test_configure_applies_outside_earlier_local_scopes():
    with local_configuration(Configuration(n_runs=3)):
        pass
    configure(n_runs=11)
    assert default_configuration().n_runs == 11
