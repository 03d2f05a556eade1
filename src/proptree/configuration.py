# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""A module controlling the settings Proptree uses when checking properties.

Either an explicit configuration can be given to a property with
``Property.with_config``, or the process-wide default on this module can be
changed, using named profiles or ``configure``.
"""

import contextlib
from typing import Any, Dict, Optional

import attr

from proptree.errors import InvalidArgument
from proptree.internal.validation import (
    check_non_negative_integer,
    check_positive_integer,
    check_type,
)
from proptree.utils.dynamicvariables import DynamicVariable

__all__ = [
    "Configuration",
    "configure",
    "default_configuration",
    "get_profile",
    "load_profile",
    "local_configuration",
    "register_profile",
]


def _check_verbose(instance, attribute, value):
    check_type(bool, value, attribute.name)


def _check_positive(instance, attribute, value):
    check_positive_integer(value, attribute.name)


def _check_non_negative(instance, attribute, value):
    check_non_negative_integer(value, attribute.name)


@attr.s(slots=True, frozen=True)
class Configuration:
    """The settings controlling a single property check.

    - ``verbose``: report failure details and shrinking progress as they
      happen, not only on the re-raised exception.
    - ``n_runs``: the number of runs which must pass before the property is
      considered to hold.
    - ``max_generate_attempts``: the maximum number of inputs drawn while
      trying to perform ``n_runs`` runs. Inputs rejected by ``where``
      conditions use up attempts without counting as runs.
    - ``max_shrink_steps``: the maximum number of simpler failing inputs to
      adopt while shrinking a counterexample. Zero turns shrinking off.
    - ``max_consecutive_attempts``: the number of draws a filtered generator
      may make in a row before it gives up on the current attempt.
    """

    verbose: bool = attr.ib(default=False, validator=_check_verbose)
    n_runs: int = attr.ib(default=100, validator=_check_positive)
    max_generate_attempts: int = attr.ib(default=10_000, validator=_check_positive)
    max_shrink_steps: int = attr.ib(default=10_000, validator=_check_non_negative)
    max_consecutive_attempts: int = attr.ib(default=30, validator=_check_positive)

    def merge(
        self, other: "Optional[Configuration]" = None, **overrides: Any
    ) -> "Configuration":
        """Return a new configuration in which the fields of ``other``, and
        then any keyword ``overrides``, replace our own."""
        changes: Dict[str, Any] = {}
        if other is not None:
            check_type(Configuration, other, "other")
            changes.update(attr.asdict(other))
        for name in overrides:
            if name not in attr.fields_dict(Configuration):
                raise InvalidArgument(
                    f"Invalid argument: {name!r} is not a valid setting"
                )
        changes.update(overrides)
        return attr.evolve(self, **changes)

    def show_changed(self) -> str:
        defaults = Configuration()
        bits = (
            f"{name}={value!r}"
            for name, value in attr.asdict(self).items()
            if value != getattr(defaults, name)
        )
        return ", ".join(sorted(bits, key=len))


_profiles: Dict[str, Configuration] = {"default": Configuration()}
default_variable = DynamicVariable(_profiles["default"])


def default_configuration() -> Configuration:
    """Return the configuration new properties start from: the innermost
    ``local_configuration`` if there is one, else the loaded profile."""
    return default_variable.value


@contextlib.contextmanager
def local_configuration(config: Configuration):
    check_type(Configuration, config, "config")
    with default_variable.with_value(config):
        yield config


def register_profile(
    name: str, parent: Optional[Configuration] = None, **overrides: Any
) -> None:
    """Registers a configuration to be loaded by name later on.

    Any field not overridden is taken from ``parent``, or from the library
    defaults if parent is None.
    """
    check_type(str, name, "name")
    base = Configuration() if parent is None else parent
    _profiles[name] = base.merge(**overrides)


def get_profile(name: str) -> Configuration:
    """Return the profile with the given name."""
    check_type(str, name, "name")
    try:
        return _profiles[name]
    except KeyError:
        raise InvalidArgument(f"Profile {name!r} is not registered") from None


def load_profile(name: str) -> None:
    """Make the profile with the given name the process-wide default.

    If the profile does not exist, InvalidArgument will be raised.
    """
    default_variable.default = get_profile(name)


def configure(**overrides: Any) -> Configuration:
    """Change the process-wide default by merging ``overrides`` into it, and
    return the result.

    This does not alter any registered profile.
    """
    default_variable.default = default_variable.default.merge(**overrides)
    return default_variable.default
