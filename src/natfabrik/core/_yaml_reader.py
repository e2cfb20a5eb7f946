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

"""YAML reader for loading an environment state snapshot into the database model."""

import logging
import pathlib
import uuid

import yaml

from . import objects
from ._util import ADDRESS_TYPES, NETWORK_SCOPES, ParseResult, parse_port_spec

logger = logging.getLogger(__name__)


def _as_list(value, what):
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f'{what} must be a list, got {type(value).__name__}')
    return value


class YamlReader:
    """Parses a snapshot YAML file into a ParseResult compatible with DatabaseManager.load()."""

    def __init__(self):
        self._machine_ids = set()
        self._unit_names = set()

    def parse(self, input_path):
        input_path = pathlib.Path(input_path)

        self._machine_ids.clear()
        self._unit_names.clear()

        with pathlib.Path.open(input_path, encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f'{input_path}: top level must be a mapping')

        env = objects.Environment()
        env.id = uuid.uuid4()
        env.name = str(data.get('name', '') or '')
        options = data.get('options') or {}
        if not isinstance(options, dict):
            raise ValueError(f'{input_path}: options must be a mapping')
        env.options = dict(options)

        for position, machine_data in enumerate(_as_list(data.get('machines'), 'machines')):
            self._parse_machine(machine_data, env, position)

        for position, service_data in enumerate(_as_list(data.get('services'), 'services')):
            self._parse_service(service_data, env, position)

        logger.debug(
            'Parsed %d machines and %d units from %s',
            len(self._machine_ids),
            len(self._unit_names),
            input_path,
        )
        return ParseResult(
            environment=env,
            machine_count=len(self._machine_ids),
            unit_count=len(self._unit_names),
        )

    def _parse_machine(self, data, env, position):
        if not isinstance(data, dict) or 'id' not in data:
            raise ValueError(f'machine #{position} has no id')
        machine_id = str(data['id'])
        if machine_id in self._machine_ids:
            raise ValueError(f'duplicate machine id: {machine_id!r}')
        self._machine_ids.add(machine_id)

        machine = objects.Machine(
            id=machine_id,
            position=position,
        )
        machine.environment = env

        seen = set()
        what = f'addresses of machine {machine_id!r}'
        for addr_pos, addr_data in enumerate(_as_list(data.get('addresses'), what)):
            address = self._parse_address(addr_data, machine_id, addr_pos)
            if address.value in seen:
                raise ValueError(
                    f'duplicate address {address.value} on machine {machine_id!r}'
                )
            seen.add(address.value)
            machine.addresses.append(address)
        return machine

    def _parse_address(self, data, machine_id, position):
        if isinstance(data, str):
            data = {'value': data}
        if not isinstance(data, dict) or not data.get('value'):
            raise ValueError(f'address #{position} of machine {machine_id!r} has no value')
        value = str(data['value'])

        type_name = data.get('type')
        if type_name is None:
            addr_type = objects.derive_address_type(value)
        else:
            addr_type = ADDRESS_TYPES.get(str(type_name).lower())
            if addr_type is None:
                raise ValueError(f'unknown address type {type_name!r} for {value}')

        scope_name = data.get('scope') or ''
        scope = NETWORK_SCOPES.get(str(scope_name).lower())
        if scope is None:
            raise ValueError(f'unknown network scope {scope_name!r} for {value}')

        return objects.Address(
            id=uuid.uuid4(),
            position=position,
            value=value,
            type=addr_type.value,
            scope=scope.value,
        )

    def _parse_service(self, data, env, position):
        if not isinstance(data, dict) or not data.get('name'):
            raise ValueError(f'service #{position} has no name')
        service = objects.Service(name=str(data['name']), position=position)
        service.environment = env

        what = f'units of service {service.name!r}'
        for unit_pos, unit_data in enumerate(_as_list(data.get('units'), what)):
            service.units.append(self._parse_unit(unit_data, service.name, unit_pos))
        return service

    def _parse_unit(self, data, service_name, position):
        if not isinstance(data, dict) or not data.get('name'):
            raise ValueError(f'unit #{position} of service {service_name!r} has no name')
        name = str(data['name'])
        if name in self._unit_names:
            raise ValueError(f'duplicate unit name: {name!r}')
        if name.partition('/')[0] != service_name:
            logger.warning('Unit %s is listed under service %s', name, service_name)
        self._unit_names.add(name)

        machine_id = data.get('machine')
        unit = objects.Unit(
            name=name,
            position=position,
            machine_id=None if machine_id is None else str(machine_id),
        )

        seen = set()
        what = f'open-ports of unit {name!r}'
        for port_pos, spec in enumerate(_as_list(data.get('open-ports'), what)):
            number, protocol = parse_port_spec(spec)
            if (number, protocol) in seen:
                logger.warning('Ignoring duplicate port %d/%s on %s', number, protocol, name)
                continue
            seen.add((number, protocol))
            unit.ports.append(
                objects.Port(
                    id=uuid.uuid4(),
                    position=port_pos,
                    protocol=protocol,
                    number=number,
                )
            )
        return unit
