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

"""Exception hierarchy of the NAT engine.

Failures scoped to a single unit (lookup, matching, validation) and to a
single gateway (execution) are caught by the driver and recorded; the
remaining errors abort a run.
"""


class NatError(Exception):
    """Base class for all NAT engine errors."""


class LookupFailure(NatError):
    """Machine or assignment data needed for a unit is missing."""


class UnitNotAssigned(LookupFailure):
    def __init__(self, unit_name: str) -> None:
        super().__init__(f'unit {unit_name!r} is not assigned to a machine')
        self.unit_name = unit_name


class MachineNotFound(LookupFailure):
    def __init__(self, machine_id: str) -> None:
        super().__init__(f'machine not found: {machine_id!r}')
        self.machine_id = machine_id


class ParentMachineNotFound(LookupFailure):
    def __init__(self, machine_id: str) -> None:
        super().__init__(f'parent machine {machine_id!r} not found')
        self.machine_id = machine_id


class NoCommonNetwork(NatError):
    def __init__(self, host_id: str, gateway_id: str) -> None:
        super().__init__(
            f'failed to find common network for {host_id} and {gateway_id}'
        )
        self.host_id = host_id
        self.gateway_id = gateway_id


class ForwardValidationError(NatError):
    """A Forward is missing a required field."""


class AddressSelectionError(NatError):
    """The gateway machine has no externally reachable address."""


class ExecutionError(NatError):
    """Installing a script on a gateway machine failed."""


class InvalidTarget(NatError, ValueError):
    def __init__(self, target: str) -> None:
        super().__init__(f'invalid target: {target!r}')
        self.target = target


class InvalidPortMapping(NatError, ValueError):
    """A port mapping is not of the form ``INTERNAL:EXTERNAL``."""
