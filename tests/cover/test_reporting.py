# This file is part of Proptree.
#
# Copyright the Proptree Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from proptree import Configuration, local_configuration, reporting
from proptree.reporting import (
    FailureReport,
    ShrinkReport,
    format_failure_report,
    format_shrink_report,
    report,
    verbose_report,
    with_verbosity,
)

from tests.common.utils import capture_out, capture_reports


def test_formats_failure_report():
    text = format_failure_report(
        FailureReport(
            n_successful=3, original_input=[1, 2], failure=ValueError("nope")
        )
    )
    assert text == "\n".join(
        [
            "",
            "(after 3 successful property test runs)",
            "Failed on: ",
            "`[1, 2]`",
            "",
            "Exception message:",
            "---",
            "ValueError: nope",
            "---",
            "",
        ]
    )


def test_formats_shrink_report():
    text = format_shrink_report(
        ShrinkReport(n_shrink_steps=2, shrunk_input=[], shrunk_failure=KeyError())
    )
    assert "Shrunken input (after 2 shrink steps):\n`[]`" in text
    assert "Shrunken exception:\n---\nKeyError\n---" in text


def test_formats_impossible_shrink():
    text = format_shrink_report(
        ShrinkReport(n_shrink_steps=0, shrunk_input=1, shrunk_failure=ValueError())
    )
    assert text == "(shrinking impossible)\n"


def test_report_always_emits():
    with capture_reports() as reports:
        report("hello")
        report(lambda: "lazy")
        report(b"bytes")
    assert reports == ["hello", "lazy", "bytes"]


def test_verbose_report_is_silent_by_default():
    with capture_reports() as reports:
        with local_configuration(Configuration()):
            verbose_report("hello")
    assert reports == []


def test_verbose_report_does_not_build_unused_messages():
    def expensive():
        raise AssertionError("should not be called")

    with with_verbosity(False):
        verbose_report(expensive)


def test_verbose_report_follows_the_default_configuration():
    with capture_reports() as reports:
        with local_configuration(Configuration(verbose=True)):
            verbose_report("hello")
    assert reports == ["hello"]


def test_explicit_verbosity_beats_the_default_configuration():
    with capture_reports() as reports:
        with local_configuration(Configuration(verbose=True)):
            with with_verbosity(False):
                verbose_report("quiet")
        with with_verbosity(True):
            verbose_report("loud")
    assert reports == ["loud"]


def test_default_reporter_prints():
    with capture_out() as out:
        report("hello")
    assert out.getvalue() == "hello\n"


def test_silent_reporter():
    with reporting.with_reporter(reporting.silent):
        assert reporting.current_reporter() is reporting.silent
        report("hello")
