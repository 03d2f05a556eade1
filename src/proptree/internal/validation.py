# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from proptree.errors import InvalidArgument


def check_type(typ, arg, name):
    if not isinstance(arg, typ) or (isinstance(arg, bool) and typ is int):
        if isinstance(typ, tuple):
            typ_string = "one of " + ", ".join(t.__name__ for t in typ)
        else:
            typ_string = typ.__name__
        raise InvalidArgument(
            f"Expected {typ_string} but got {name}={arg!r} (type={type(arg).__name__})"
        )


def check_positive_integer(value, name):
    """Checks that value is an integer of at least one.

    Otherwise raises InvalidArgument.
    """
    check_type(int, value, name)
    if value < 1:
        raise InvalidArgument(f"{name}={value!r} should be at least one.")


def check_non_negative_integer(value, name):
    check_type(int, value, name)
    if value < 0:
        raise InvalidArgument(f"{name}={value!r} should not be negative.")


def check_valid_bound(value, name):
    """Checks that value is either unspecified, or a valid integer bound.

    Otherwise raises InvalidArgument.
    """
    if value is None:
        return
    check_type(int, value, name)


def check_valid_interval(lower_bound, upper_bound, lower_name, upper_name):
    """Checks that lower_bound and upper_bound are either unspecified, or they
    define a valid interval on the number line.

    Otherwise raises InvalidArgument.
    """
    if lower_bound is None or upper_bound is None:
        return
    if upper_bound < lower_bound:
        raise InvalidArgument(
            f"Cannot have {upper_name}={upper_bound!r} < {lower_name}={lower_bound!r}"
        )


def check_valid_sizes(min_size, max_size):
    check_type(int, min_size, "min_size")
    if min_size < 0:
        raise InvalidArgument(f"Invalid min_size={min_size!r} < 0")
    check_valid_bound(max_size, "max_size")
    check_valid_interval(min_size, max_size, "min_size", "max_size")
