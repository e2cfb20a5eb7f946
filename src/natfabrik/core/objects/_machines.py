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

"""Machine and Address models."""

from __future__ import (
    annotations,  # This is needed since SQLAlchemy does not support forward references yet
)

import uuid
from typing import TYPE_CHECKING

import sqlalchemy
import sqlalchemy.orm

from ._base import Base
from ._types import AddressType, NetworkScope

if TYPE_CHECKING:
    from ._environment import Environment


class Machine(Base):
    """A machine known to the environment.

    Container machines use hierarchical ids such as ``0/lxc/2``; the
    enclosing machine is recovered from the id, so there is no parent
    column.
    """

    __tablename__ = 'machines'

    id: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
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
        back_populates='machines',
    )
    addresses: sqlalchemy.orm.Mapped[list[Address]] = sqlalchemy.orm.relationship(
        'Address',
        back_populates='machine',
        order_by='Address.position',
    )

    __table_args__ = (
        sqlalchemy.Index('ix_machines_environment_id', 'environment_id'),
    )


class Address(Base):
    """One address declared by a machine."""

    __tablename__ = 'addresses'

    id: sqlalchemy.orm.Mapped[uuid.UUID] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Uuid,
        primary_key=True,
    )
    machine_id: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        sqlalchemy.ForeignKey('machines.id'),
        nullable=False,
    )
    position: sqlalchemy.orm.Mapped[int] = sqlalchemy.orm.mapped_column(
        sqlalchemy.Integer,
        default=0,
    )
    value: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String,
        default='',
    )
    type: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String(16),
        default=AddressType.IPv4.value,
    )
    scope: sqlalchemy.orm.Mapped[str] = sqlalchemy.orm.mapped_column(
        sqlalchemy.String(16),
        default=NetworkScope.Unknown.value,
    )

    machine: sqlalchemy.orm.Mapped[Machine] = sqlalchemy.orm.relationship(
        'Machine',
        back_populates='addresses',
    )

    __table_args__ = (
        sqlalchemy.Index('ix_addresses_machine_id', 'machine_id'),
        sqlalchemy.UniqueConstraint(
            'machine_id', 'value', name='uq_addresses_machine'
        ),
    )
