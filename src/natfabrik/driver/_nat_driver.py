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

"""NatDriver base class: orchestrates planning, rendering and installation.

Loads the environment snapshot, plans a Forward for every contained unit
matching the target, groups the forwards per gateway machine and hands
them to the platform renderer.  The rendered scripts are then either
printed (dry run) or installed on each gateway over SSH.
"""

from __future__ import annotations

import concurrent.futures
import dataclasses
import logging
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, TextIO

from natfabrik.core.options import NatDefaults
from natfabrik.driver._base import BaseDriver
from natfabrik.driver._remote import SshExecutor
from natfabrik.nat import (
    ExecutionError,
    Forward,
    PlanStatus,
    ScriptMode,
    StateSnapshot,
    Target,
    UnitPlan,
    build_machine_index,
    group_by_gateway,
    plan_units,
    select_public_address,
)

if TYPE_CHECKING:
    from natfabrik.core._database import DatabaseManager
    from natfabrik.nat import Machine

logger = logging.getLogger(__name__)


class NatDriver(BaseDriver):
    """Orchestrates one NAT run over a loaded environment.

    Handles:
    - Option merging (defaults, snapshot options, overrides)
    - Per-unit planning and skip reporting
    - Script output or installation per gateway
    """

    def __init__(self, db: DatabaseManager) -> None:
        super().__init__()
        self.db: DatabaseManager = db

        # Options
        self.dry_run: bool = False
        self.clear: bool = False
        self.mode: ScriptMode = ScriptMode.EXPOSE
        self.port_map: Mapping[int, int] = {}
        self.overrides: dict = {}
        self.executor: SshExecutor | None = None

        # Output
        self.config: NatDefaults = NatDefaults()
        self.snapshot: StateSnapshot | None = None
        self.plans: list[UnitPlan] = []
        self.forwards: dict[str, list[Forward]] = {}
        self.scripts: dict[str, str] = {}
        self.failed_gateways: list[str] = []

    def render(self, grouped: Mapping[str, list[Forward]]) -> dict[str, str]:
        """Platform-specific rendering. Override in subclasses."""
        raise NotImplementedError

    def prepare(self) -> None:
        """Load the snapshot and merge its options with the overrides.

        Raises ValueError for an empty database or malformed options.
        """
        self.snapshot = StateSnapshot.from_database(self.db)
        self.config = dataclasses.replace(
            NatDefaults.from_options(dict(self.snapshot.options)),
            **self.overrides,
        )

    def run(self, target: str | Target | None, out: TextIO | None = None) -> int:
        """Plan, render and output or install the NAT scripts.

        Returns 0 on success and 1 if installing on any gateway failed.
        Raises InvalidTarget for a malformed target.
        """
        if isinstance(target, str):
            target = Target.parse(target)

        if self.snapshot is None:
            self.prepare()

        self.plans = plan_units(
            self.snapshot,
            target,
            port_map=self.port_map,
            device=self.config.external_device,
        )
        for plan in self.plans:
            if plan.status == PlanStatus.SKIPPED:
                self.warning(plan.unit.name, plan.reason)

        self.forwards = group_by_gateway(self.plans)
        if not self.forwards:
            logger.warning(
                'No forwards to apply for %s',
                target.name if target else self.snapshot.name,
            )
            return 0

        self.scripts = self.render(self.forwards)
        if self.dry_run:
            self.print_scripts(out if out is not None else sys.stdout)
            return 0
        return self.install_scripts()

    def print_scripts(self, out: TextIO) -> None:
        for gateway_id, script in self.scripts.items():
            out.write(f'{gateway_id}:\n')
            out.write(script)

    def install_scripts(self) -> int:
        """Install every rendered script on its gateway machine."""
        if self.executor is None:
            self.executor = SshExecutor(self.config)
        machine_index = build_machine_index(self.snapshot.machines)
        jobs = max(1, self.config.parallel_jobs)

        results: dict[str, ExecutionError | None] = {}
        if jobs == 1 or len(self.scripts) == 1:
            for gateway_id in self.scripts:
                results[gateway_id] = self._install_one(machine_index, gateway_id)
        else:
            with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as pool:
                futures = {
                    gateway_id: pool.submit(self._install_one, machine_index, gateway_id)
                    for gateway_id in self.scripts
                }
                for gateway_id, future in futures.items():
                    results[gateway_id] = future.result()

        for gateway_id, err in results.items():
            if err is None:
                self.info(f'Configured NAT on machine {gateway_id}')
                continue
            self.failed_gateways.append(gateway_id)
            self.error(gateway_id, f'nat script failed: {err}')
        return 1 if self.failed_gateways else 0

    def _install_one(
        self, machine_index: Mapping[str, Machine], gateway_id: str
    ) -> ExecutionError | None:
        try:
            machine = machine_index.get(gateway_id)
            if machine is None:
                raise ExecutionError(f'machine {gateway_id} not found')
            address = select_public_address(machine.addresses)
            if not address:
                raise ExecutionError("could not resolve machine's public address")
            logger.info('Installing NAT script on %s (%s)', gateway_id, address)
            self.executor.execute(address, self.scripts[gateway_id])
        except ExecutionError as e:
            return e
        return None
