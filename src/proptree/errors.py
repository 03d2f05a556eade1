# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.


class ProptreeException(Exception):
    """Generic parent class for exceptions thrown by Proptree."""


class InvalidArgument(ProptreeException, TypeError):
    """Used to indicate that the arguments to a Proptree function were in
    some manner incorrect."""


class FilterRejected(ProptreeException):
    """A filtered generator could not produce a value satisfying its
    condition within ``max_consecutive_attempts`` draws.

    This is a control exception: the property runner treats it as a raw
    attempt which did not count, rather than as a failure. If you're
    seeing it outside of a call to ``generate``, your condition is too
    strict for the generator it filters.
    """

    def __init__(self, condition, attempts):
        self.condition = condition
        self.attempts = attempts
        super().__init__(
            f"No value satisfying {condition} was found after {attempts} attempts"
        )


class GeneratorExhausted(ProptreeException):
    """We ran out of generation attempts before we could perform enough runs
    whose inputs satisfied the ``where`` conditions of the property.

    This is not a failure of the property itself. It means the conditions
    reject too much of what the generators produce: try relaxing them, or
    write generators which produce satisfying values directly.
    """

    def __init__(self, n_runs, max_generate_attempts, n_runs_performed=None):
        self.n_runs = n_runs
        self.max_generate_attempts = max_generate_attempts
        self.n_runs_performed = n_runs_performed
        super().__init__(
            f"Could not perform n_runs={n_runs} runs "
            f"(exhausted max_generate_attempts={max_generate_attempts} tries) "
            "because too few generator results were adhering to the `where` "
            "condition.\n\nTry refining your generators instead."
        )
