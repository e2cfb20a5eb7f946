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

"""Declarative base of the snapshot models."""

from __future__ import annotations  # This is needed since SQLAlchemy does not support forward references yet

import sqlalchemy
import sqlalchemy.event
import sqlalchemy.orm

NAMING_CONVENTION = {
    'ix': 'ix_%(column_0_label)s',
    'uq': 'uq_%(table_name)s_%(column_0_name)s',
    'fk': 'fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s',
    'pk': 'pk_%(table_name)s',
}


class Base(sqlalchemy.orm.DeclarativeBase):
    metadata = sqlalchemy.MetaData(naming_convention=NAMING_CONVENTION)


def enable_sqlite_fks(engine: sqlalchemy.engine.Engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    A unit's machine id is not a foreign key.
    """
    if engine.dialect.name != 'sqlite':
        return

    @sqlalchemy.event.listens_for(engine, 'connect')
    def _on_connect(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()
