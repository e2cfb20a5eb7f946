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

"""Containment resolution: which machine a unit's container lives in."""

from __future__ import annotations

import types
from collections.abc import Iterable, Mapping

from natfabrik.nat._errors import MachineNotFound, ParentMachineNotFound, UnitNotAssigned
from natfabrik.nat._model import Machine, Unit, UnitContainment
from natfabrik.nat._names import parent_id


def build_machine_index(machines: Iterable[Machine]) -> Mapping[str, Machine]:
    """Build the read-only machine id -> Machine lookup for one run."""
    return types.MappingProxyType({m.id: m for m in machines})


def resolve_containment(
    unit: Unit,
    machine_index: Mapping[str, Machine],
) -> UnitContainment | None:
    """Resolve the gateway/host pair for *unit*.

    Returns None when the unit runs on a top-level machine: there is
    nothing to translate for it.  Missing data raises a LookupFailure.
    """
    machine_id = unit.machine_id
    if not machine_id:
        raise UnitNotAssigned(unit.name)

    host = machine_index.get(machine_id)
    if host is None:
        raise MachineNotFound(machine_id)

    gateway_id = parent_id(machine_id)
    if gateway_id is None:
        return None

    gateway = machine_index.get(gateway_id)
    if gateway is None:
        raise ParentMachineNotFound(gateway_id)
    return UnitContainment(unit=unit, gateway=gateway, host=host)
