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

"""NAT engine: containment resolution, network matching and forward planning."""

from natfabrik.nat._containment import build_machine_index, resolve_containment
from natfabrik.nat._errors import (
    AddressSelectionError,
    ExecutionError,
    ForwardValidationError,
    InvalidPortMapping,
    InvalidTarget,
    LookupFailure,
    MachineNotFound,
    NatError,
    NoCommonNetwork,
    ParentMachineNotFound,
    UnitNotAssigned,
)
from natfabrik.nat._model import (
    DEFAULT_DEVICE,
    Address,
    Forward,
    Machine,
    Port,
    ScriptMode,
    StateSnapshot,
    Target,
    Unit,
    UnitContainment,
)
from natfabrik.nat._names import is_machine_id, is_unit_name, parent_id
from natfabrik.nat._network import (
    greatest_common_prefix,
    is_loopback,
    match_networks,
    select_public_address,
)
from natfabrik.nat._planner import (
    PlanStatus,
    UnitPlan,
    group_by_gateway,
    new_forward,
    parse_port_mappings,
    plan_unit,
    plan_units,
)

__all__ = [
    'DEFAULT_DEVICE',
    'Address',
    'AddressSelectionError',
    'ExecutionError',
    'Forward',
    'ForwardValidationError',
    'InvalidPortMapping',
    'InvalidTarget',
    'LookupFailure',
    'Machine',
    'MachineNotFound',
    'NatError',
    'NoCommonNetwork',
    'ParentMachineNotFound',
    'PlanStatus',
    'Port',
    'ScriptMode',
    'StateSnapshot',
    'Target',
    'Unit',
    'UnitContainment',
    'UnitNotAssigned',
    'UnitPlan',
    'build_machine_index',
    'greatest_common_prefix',
    'group_by_gateway',
    'is_loopback',
    'is_machine_id',
    'is_unit_name',
    'match_networks',
    'new_forward',
    'parent_id',
    'parse_port_mappings',
    'plan_unit',
    'plan_units',
    'resolve_containment',
    'select_public_address',
]
