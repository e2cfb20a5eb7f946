# Copyright (C) 2026 Linuxfabrik <info@linuxfabrik.ch>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# On Debian systems, the complete text of the GNU General Public License
# version 2 can be found in /usr/share/common-licenses/GPL-2.
#
# SPDX-License-Identifier: GPL-2.0-or-later

"""Expected output regression tests for the iptables NAT scripts."""

import pytest

from .conftest import (
    EXPECTED_OUTPUT_DIR,
    _find_fixture,
    discover_test_cases,
    target_to_file_name,
)

_EXPOSE_CASES = discover_test_cases('expose')
_OUTBOUND_CASES = discover_test_cases('outbound')


def _check(fixture_name, target, mode, dry_run, tmp_path):
    fixture_path = _find_fixture(fixture_name)
    expected_path = (
        EXPECTED_OUTPUT_DIR / mode / fixture_name / f'{target_to_file_name(target)}.out'
    )

    actual = dry_run(fixture_path, target, mode)
    expected = expected_path.read_text()

    # Save output for easier diffing
    actual_path = tmp_path / expected_path.name
    actual_path.write_text(actual)

    assert actual == expected, (
        f'{mode} output differs from expected output.\n'
        f'  Actual:   {actual_path}\n'
        f'  Expected: {expected_path}\n'
        f'Run "python tests/update_expected_output.py --fixture {fixture_name} --mode {mode}" to update.'
    )


@pytest.mark.parametrize(
    ('fixture_name', 'target'),
    _EXPOSE_CASES,
    ids=[f'{f}/{t}' for f, t in _EXPOSE_CASES],
)
def test_expose_expected_output(fixture_name, target, dry_run, tmp_path):
    _check(fixture_name, target, 'expose', dry_run, tmp_path)


@pytest.mark.parametrize(
    ('fixture_name', 'target'),
    _OUTBOUND_CASES,
    ids=[f'{f}/{t}' for f, t in _OUTBOUND_CASES],
)
def test_outbound_expected_output(fixture_name, target, dry_run, tmp_path):
    _check(fixture_name, target, 'outbound', dry_run, tmp_path)


def test_cases_discovered():
    assert ('owncloud', 'owncloud/0') in _EXPOSE_CASES
    assert ('multi', '2/lxc/0') in _OUTBOUND_CASES
