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

"""Service, Unit and Port models."""

from __future__ import (
    annotations,  # This is needed since SQLAlchemy does not support forward references yet
)

import uuid
from typing import TYPE_CHECKING

import sqlalchemy
import sqlalchemy.orm

from ._base import Base

if TYPE_CHECKING:
    from ._environment import Environment


class Service(Base):
    """A deployed service; owns its units."""

    __tablename__ = 'services'

    name: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        primary_key=True,
    )
    environment_id: sqlalchemy.orm.Mapped[uuid.UUID] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Uuid,
        sqlalchemy.ForeignKey('environments.id'),
        nullable=False,
    )
    position: sqlalchemy.orm.Mapped[int] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Integer,
        default=0,
    )

    environment: sqlalchemy.orm.Mapped[Environment] = sqlalchemy.orm.relationship(
        'Environment',
        back_populates='services',
    )
    units: sqlalchemy.orm.Mapped[list[Unit]] = sqlalchemy.orm.relationship(
        'Unit',
        back_populates='service',
        order_by='Unit.position',
    )


class Unit(Base):
    """A service unit.

    ``machine_id`` is not a foreign key: a unit may reference a machine
    missing from the snapshot, which the resolver reports as a lookup
    failure.
    """

    __tablename__ = 'units'

    name: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        primary_key=True,
    )
    service_name: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        sqlalchemy.ForeignKey('services.name'),
        nullable=False,
    )
    position: sqlalchemy.orm.Mapped[int] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Integer,
        default=0,
    )
    machine_id: sqlalchemy.orm.Mapped[str | None] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        nullable=True,
        default=None,
    )

    service: sqlalchemy.orm.Mapped[Service] = sqlalchemy.orm.relationship(
        'Service',
        back_populates='units',
    )
    ports: sqlalchemy.orm.Mapped[list[Port]] = sqlalchemy.orm.relationship(
        'Port',
        back_populates='unit',
        order_by='Port.position',
    )

    __table_args__ = (
        sqlalchemy.Index('ix_units_service_name', 'service_name'),
        sqlalchemy.Index('ix_units_machine_id', 'machine_id'),
    )


class Port(Base):
    """A port opened by a unit."""

    __tablename__ = 'ports'

    id: sqlalchemy.orm.Mapped[uuid.UUID] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Uuid,
        primary_key=True,
    )
    unit_name: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        sqlalchemy.ForeignKey('units.name'),
        nullable=False,
    )
    position: sqlalchemy.orm.Mapped[int] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Integer,
        default=0,
    )
    protocol: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String(8),
        default='tcp',
    )
    number: sqlalchemy.orm.Mapped[int] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Integer,
    )

    unit: sqlalchemy.orm.Mapped[Unit] = sqlalchemy.orm.relationship(
        'Unit',
        back_populates='ports',
    )

    __table_args__ = (
        sqlalchemy.UniqueConstraint(
            'unit_name', 'protocol', 'number', name='uq_ports_unit'
        ),
    )
