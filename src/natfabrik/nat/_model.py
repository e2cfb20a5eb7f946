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

"""Immutable snapshot values the NAT engine works on.

The state provider's ORM objects are copied into these frozen dataclasses
once per run (see :meth:`StateSnapshot.from_database`), so planning and
rendering never touch a database session.
"""

from __future__ import annotations

import dataclasses
import enum
import types
from collections.abc import Mapping
from typing import TYPE_CHECKING

from natfabrik.core.objects import AddressType, NetworkScope, derive_address_type
from natfabrik.nat._errors import ForwardValidationError, InvalidTarget
from natfabrik.nat._names import is_machine_id, is_unit_name

if TYPE_CHECKING:
    from natfabrik.core import DatabaseManager

DEFAULT_DEVICE = 'eth0'

_EMPTY_MAP: Mapping[int, int] = types.MappingProxyType({})


class ScriptMode(enum.StrEnum):
    """What a generated script sets up."""

    EXPOSE = 'expose'
    OUTBOUND = 'outbound'


@dataclasses.dataclass(frozen=True, slots=True)
class Address:
    value: str
    type: AddressType = AddressType.IPv4
    scope: NetworkScope = NetworkScope.Unknown

    @classmethod
    def new(cls, value: str, scope: NetworkScope = NetworkScope.Unknown) -> Address:
        """Create an Address, deriving its type from *value*."""
        return cls(value, derive_address_type(value), scope)


@dataclasses.dataclass(frozen=True, slots=True)
class Machine:
    id: str
    addresses: tuple[Address, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class Port:
    number: int
    protocol: str = 'tcp'

    def __str__(self) -> str:
        return f'{self.number}/{self.protocol}'


@dataclasses.dataclass(frozen=True, slots=True)
class Unit:
    name: str
    machine_id: str | None = None
    ports: tuple[Port, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Point-in-time, read-only view of an environment."""

    name: str = ''
    machines: tuple[Machine, ...] = ()
    units: tuple[Unit, ...] = ()
    options: Mapping = dataclasses.field(default_factory=lambda: _EMPTY_MAP)

    @classmethod
    def from_database(cls, db: DatabaseManager) -> StateSnapshot:
        """Copy the environment held by *db* into a StateSnapshot.

        Machines, addresses, units and ports keep their declaration order.
        """
        with db.session() as session:
            env = db.environment(session)
            if env is None:
                raise ValueError('no environment loaded')
            machines = tuple(
                Machine(
                    id=m.id,
                    addresses=tuple(
                        Address(
                            a.value,
                            AddressType(a.type),
                            NetworkScope(a.scope),
                        )
                        for a in m.addresses
                    ),
                )
                for m in env.machines
            )
            units = tuple(
                Unit(
                    name=u.name,
                    machine_id=u.machine_id,
                    ports=tuple(Port(p.number, p.protocol) for p in u.ports),
                )
                for s in env.services
                for u in s.units
            )
            return cls(
                name=env.name,
                machines=machines,
                units=units,
                options=types.MappingProxyType(dict(env.options or {})),
            )


@dataclasses.dataclass(frozen=True, slots=True)
class UnitContainment:
    """A unit together with the machine it runs on and that machine's parent."""

    unit: Unit
    gateway: Machine | None
    host: Machine


@dataclasses.dataclass(frozen=True, slots=True)
class Target:
    """The unit or machine a run is restricted to."""

    name: str
    is_unit: bool

    @classmethod
    def parse(cls, value: str) -> Target:
        if is_unit_name(value):
            return cls(value, True)
        if is_machine_id(value):
            return cls(value, False)
        raise InvalidTarget(value)

    def matches(self, containment: UnitContainment) -> bool:
        if self.is_unit:
            return containment.unit.name == self.name
        gateway_id = containment.gateway.id if containment.gateway else None
        return self.name in (containment.host.id, gateway_id)


@dataclasses.dataclass(frozen=True, slots=True)
class Forward:
    """Validated NAT plan for one contained unit."""

    containment: UnitContainment
    external_gateway_addr: str = ''
    internal_gateway_addr: str = ''
    internal_host_addr: str = ''
    internal_ports: tuple[Port, ...] = ()
    external_gateway_device: str = DEFAULT_DEVICE
    port_map: Mapping[int, int] = dataclasses.field(default_factory=lambda: _EMPTY_MAP)

    @property
    def unit(self) -> Unit:
        return self.containment.unit

    @property
    def gateway(self) -> Machine | None:
        return self.containment.gateway

    @property
    def host(self) -> Machine:
        return self.containment.host

    def external_port(self, port: Port) -> int:
        """External port for *port*; unmapped ports keep their number."""
        return self.port_map.get(port.number, port.number)

    def validate(self) -> None:
        if self.gateway is None:
            raise ForwardValidationError('external gateway machine not defined')
        if not self.external_gateway_addr:
            raise ForwardValidationError('external gateway address not found')
        if not self.external_gateway_device:
            raise ForwardValidationError('external gateway device not found')
        if not self.internal_host_addr:
            raise ForwardValidationError('internal host address not found')
        if not self.internal_ports:
            raise ForwardValidationError('no ports to forward')

    def with_port_map(self, port_map: Mapping[int, int] | None) -> Forward:
        """Return a copy using *port_map* (internal -> external)."""
        frozen = types.MappingProxyType(dict(port_map)) if port_map else _EMPTY_MAP
        return dataclasses.replace(self, port_map=frozen)
