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

"""Shared pytest fixtures for the NAT engine and driver tests."""

import io
from pathlib import Path

import pytest

import natfabrik.core
from natfabrik.core.objects import NetworkScope
from natfabrik.nat import Address, Machine, Port, StateSnapshot, Unit

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
EXPECTED_OUTPUT_DIR = Path(__file__).parent / 'expected-output'

FIXTURE_EXTENSIONS = ('.yml', '.yaml')

MODES = ('expose', 'outbound')


def _find_fixture(
    fixture_name: str,
    fixtures_dir: Path = FIXTURES_DIR,
) -> Path | None:
    """Find a fixture file by name, trying .yml then .yaml extensions."""
    for ext in FIXTURE_EXTENSIONS:
        path = fixtures_dir / f'{fixture_name}{ext}'
        if path.exists():
            return path
    return None


_db_cache: dict[Path, bytes] = {}


def _get_db(fixture_path: Path) -> natfabrik.core.DatabaseManager:
    """Return a DatabaseManager loaded from a cached in-memory SQLite snapshot.

    The fixture file is parsed once and its database serialized via
    ``sqlite3.Connection.serialize()``.  Each call creates a fresh
    DatabaseManager and restores the snapshot with ``deserialize()``
    so that every test is fully isolated.
    """
    resolved = fixture_path.resolve()
    if resolved not in _db_cache:
        db = natfabrik.core.DatabaseManager()
        db.load(str(fixture_path))
        conn = db.engine.raw_connection()
        _db_cache[resolved] = conn.dbapi_connection.serialize()
        conn.close()

    copy = natfabrik.core.DatabaseManager()
    conn = copy.engine.raw_connection()
    conn.dbapi_connection.deserialize(_db_cache[resolved])
    conn.close()
    copy.source = fixture_path
    return copy


def target_to_file_name(target: str) -> str:
    return target.replace('/', '_')


def file_name_to_target(stem: str) -> str:
    return stem.replace('_', '/')


def _run_dry(fixture_path: Path, target: str, mode: str) -> str:
    """Run the iptables driver in dry-run mode and return its stdout."""
    from natfabrik.platforms.iptables import NatDriver_ipt

    driver = NatDriver_ipt(_get_db(fixture_path))
    driver.mode = mode
    driver.dry_run = True
    out = io.StringIO()
    result = driver.run(target, out=out)
    if result:
        pytest.fail(f'Driver failed for {target} ({mode}): {driver.get_errors()}')
    return out.getvalue()


@pytest.fixture()
def dry_run():
    """Return a helper that renders a fixture target in dry-run mode."""
    return _run_dry


@pytest.fixture()
def load_fixture():
    """Return a helper that loads a named fixture into a fresh database."""

    def _inner(fixture_name: str) -> natfabrik.core.DatabaseManager:
        path = _find_fixture(fixture_name)
        assert path is not None, f'fixture not found: {fixture_name}'
        return _get_db(path)

    return _inner


@pytest.fixture()
def owncloud_snapshot():
    """The classic single host: owncloud/0 in LXC container 0/lxc/2."""
    gateway = Machine(
        '0',
        (
            Address.new('127.0.0.1', NetworkScope.MachineLocal),
            Address.new('192.168.122.107', NetworkScope.Public),
            Address.new('10.0.3.1', NetworkScope.CloudLocal),
        ),
    )
    host = Machine(
        '0/lxc/2',
        (
            Address.new('127.0.0.1', NetworkScope.MachineLocal),
            Address.new('10.0.3.151', NetworkScope.CloudLocal),
        ),
    )
    return StateSnapshot(
        name='owncloud',
        machines=(gateway, host),
        units=(
            Unit('haproxy/0', '0', (Port(80),)),
            Unit('owncloud/0', '0/lxc/2', (Port(80),)),
        ),
    )


def discover_test_cases(mode: str) -> list[tuple[str, str]]:
    """Discover (fixture_name, target) pairs from expected output directory.

    Returns a list of tuples suitable for pytest parametrize.
    """
    mode_dir = EXPECTED_OUTPUT_DIR / mode
    if not mode_dir.exists():
        return []

    cases = []
    for fixture_dir in sorted(mode_dir.iterdir()):
        if not fixture_dir.is_dir():
            continue
        fixture_name = fixture_dir.name
        if _find_fixture(fixture_name) is None:
            continue
        for expected_file in sorted(fixture_dir.glob('*.out')):
            cases.append((fixture_name, file_name_to_target(expected_file.stem)))
    return cases
