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

"""Unit tests for machine id syntax and containment resolution."""

import types

import pytest

from natfabrik.nat import (
    InvalidTarget,
    Machine,
    MachineNotFound,
    ParentMachineNotFound,
    Target,
    Unit,
    UnitContainment,
    UnitNotAssigned,
    build_machine_index,
    is_machine_id,
    is_unit_name,
    parent_id,
    resolve_containment,
)


@pytest.mark.parametrize(
    ('machine_id', 'expected'),
    [
        ('0', None),
        ('12', None),
        ('0/lxc/2', '0'),
        ('1/kvm/0', '1'),
        ('0/lxc/2/lxc/1', '0/lxc/2'),
    ],
)
def test_parent_id(machine_id, expected):
    assert parent_id(machine_id) == expected


@pytest.mark.parametrize(
    'value',
    ['0', '17', '0/lxc/2', '2/lxc/0/kvm/3'],
)
def test_is_machine_id(value):
    assert is_machine_id(value)
    assert not is_unit_name(value)


@pytest.mark.parametrize(
    'value',
    ['owncloud/0', 'mysql/12', 'wordpress-2fa/1'],
)
def test_is_unit_name(value):
    assert is_unit_name(value)
    assert not is_machine_id(value)


@pytest.mark.parametrize(
    'value',
    ['', 'owncloud', '0/lxc', '01', 'Owncloud/0', 'owncloud/0/1', '0/lxc/2\n'],
)
def test_invalid_target(value):
    with pytest.raises(InvalidTarget):
        Target.parse(value)


def test_target_parse():
    assert Target.parse('owncloud/0') == Target('owncloud/0', is_unit=True)
    assert Target.parse('0/lxc/2') == Target('0/lxc/2', is_unit=False)


def _index(*ids):
    return build_machine_index(Machine(i) for i in ids)


def test_machine_index_is_read_only():
    index = _index('0', '0/lxc/2')
    assert isinstance(index, types.MappingProxyType)
    with pytest.raises(TypeError):
        index['1'] = Machine('1')


def test_top_level_machine_is_not_contained():
    assert resolve_containment(Unit('haproxy/0', '0'), _index('0')) is None


def test_container_resolves_gateway():
    index = _index('0', '0/lxc/2')
    uc = resolve_containment(Unit('owncloud/0', '0/lxc/2'), index)
    assert uc == UnitContainment(
        unit=Unit('owncloud/0', '0/lxc/2'),
        gateway=index['0'],
        host=index['0/lxc/2'],
    )


def test_nested_container_resolves_direct_parent():
    index = _index('2', '2/lxc/0', '2/lxc/0/lxc/1')
    uc = resolve_containment(Unit('cache/0', '2/lxc/0/lxc/1'), index)
    assert uc.gateway.id == '2/lxc/0'
    assert uc.host.id == '2/lxc/0/lxc/1'


def test_unassigned_unit():
    with pytest.raises(UnitNotAssigned):
        resolve_containment(Unit('broken/0'), _index('0'))


def test_missing_machine():
    with pytest.raises(MachineNotFound) as excinfo:
        resolve_containment(Unit('broken/1', '3/lxc/0'), _index('0'))
    assert str(excinfo.value) == "machine not found: '3/lxc/0'"


def test_missing_parent_machine():
    with pytest.raises(ParentMachineNotFound) as excinfo:
        resolve_containment(Unit('broken/2', '4/lxc/1'), _index('4/lxc/1'))
    assert str(excinfo.value) == "parent machine '4' not found"


def test_target_matches_unit_host_or_gateway():
    index = _index('0', '0/lxc/2')
    uc = resolve_containment(Unit('owncloud/0', '0/lxc/2'), index)
    assert Target.parse('owncloud/0').matches(uc)
    assert Target.parse('0').matches(uc)
    assert Target.parse('0/lxc/2').matches(uc)
    assert not Target.parse('owncloud/1').matches(uc)
    assert not Target.parse('1').matches(uc)
