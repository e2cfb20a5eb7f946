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

"""Forward planning: turn contained units into validated Forward plans."""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Iterable, Mapping

from natfabrik.core._util import check_port_number
from natfabrik.nat._containment import build_machine_index, resolve_containment
from natfabrik.nat._errors import (
    AddressSelectionError,
    ForwardValidationError,
    InvalidPortMapping,
    NatError,
)
from natfabrik.nat._model import (
    DEFAULT_DEVICE,
    Forward,
    Machine,
    StateSnapshot,
    Target,
    Unit,
    UnitContainment,
)
from natfabrik.nat._network import match_networks, select_public_address

logger = logging.getLogger(__name__)


def new_forward(
    containment: UnitContainment,
    port_map: Mapping[int, int] | None = None,
    device: str = DEFAULT_DEVICE,
) -> Forward:
    """Build and validate the Forward for *containment*.

    Raises NoCommonNetwork, AddressSelectionError or
    ForwardValidationError.
    """
    if containment.gateway is None:
        raise ForwardValidationError('external gateway machine not defined')
    host_addr, gateway_addr = match_networks(containment.host, containment.gateway)

    external_addr = select_public_address(containment.gateway.addresses)
    if not external_addr:
        raise AddressSelectionError(
            f'failed to get internal address: {containment.gateway.id!r}'
        )

    fwd = Forward(
        containment=containment,
        external_gateway_addr=external_addr,
        internal_gateway_addr=gateway_addr,
        internal_host_addr=host_addr,
        internal_ports=containment.unit.ports,
        external_gateway_device=device,
    )
    fwd.validate()
    return fwd.with_port_map(port_map)


class PlanStatus(enum.StrEnum):
    FORWARD = 'forward'
    NOT_CONTAINED = 'not-contained'
    UNTARGETED = 'untargeted'
    SKIPPED = 'skipped'


@dataclasses.dataclass(frozen=True, slots=True)
class UnitPlan:
    """Outcome of planning one unit."""

    unit: Unit
    status: PlanStatus
    forward: Forward | None = None
    reason: str = ''

    @property
    def gateway_id(self) -> str | None:
        if self.forward is None or self.forward.gateway is None:
            return None
        return self.forward.gateway.id


def plan_unit(
    unit: Unit,
    machine_index: Mapping[str, Machine],
    target: Target | None = None,
    port_map: Mapping[int, int] | None = None,
    device: str = DEFAULT_DEVICE,
) -> UnitPlan:
    """Plan a single unit; never raises for per-unit failures."""
    try:
        containment = resolve_containment(unit, machine_index)
    except NatError as e:
        logger.warning('Skipping %s: %s', unit.name, e)
        return UnitPlan(unit, PlanStatus.SKIPPED, reason=str(e))

    if containment is None:
        logger.debug('%s is not deployed in a container', unit.name)
        return UnitPlan(unit, PlanStatus.NOT_CONTAINED)

    if target is not None and not target.matches(containment):
        return UnitPlan(unit, PlanStatus.UNTARGETED)

    try:
        fwd = new_forward(containment, port_map, device)
    except NatError as e:
        logger.warning('Skipping %s: %s', unit.name, e)
        return UnitPlan(unit, PlanStatus.SKIPPED, reason=str(e))
    return UnitPlan(unit, PlanStatus.FORWARD, forward=fwd)


def plan_units(
    snapshot: StateSnapshot,
    target: Target | None = None,
    port_map: Mapping[int, int] | None = None,
    device: str = DEFAULT_DEVICE,
) -> list[UnitPlan]:
    """Plan every unit of *snapshot*, in snapshot order.

    Containment is resolved for the whole fleet so lookup failures are
    reported even for units outside *target*.  Only targeted units get a
    Forward.
    """
    machine_index = build_machine_index(snapshot.machines)
    return [
        plan_unit(unit, machine_index, target, port_map, device)
        for unit in snapshot.units
    ]


def group_by_gateway(plans: Iterable[UnitPlan]) -> dict[str, list[Forward]]:
    """Collect the Forwards of *plans* per gateway machine id.

    Gateways appear in the order their first Forward was planned.
    """
    grouped: dict[str, list[Forward]] = {}
    for plan in plans:
        if plan.status is not PlanStatus.FORWARD:
            continue
        grouped.setdefault(plan.gateway_id, []).append(plan.forward)
    return grouped


def parse_port_mappings(text: str | None) -> dict[int, int]:
    """Parse ``INTERNAL:EXTERNAL[,INTERNAL:EXTERNAL...]`` into a port map.

    Empty input yields an empty map. A later duplicate internal port wins.
    """
    port_map: dict[int, int] = {}
    if not text:
        return port_map
    for item in text.split(','):
        internal, sep, external = item.strip().partition(':')
        try:
            if not sep:
                raise ValueError('expected INTERNAL:EXTERNAL')
            port_map[check_port_number(int(internal))] = check_port_number(int(external))
        except ValueError as e:
            raise InvalidPortMapping(f'invalid port mapping {item!r}: {e}') from None
    return port_map
