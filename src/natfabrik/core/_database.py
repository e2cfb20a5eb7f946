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

import contextlib
import logging
import pathlib

import sqlalchemy
import sqlalchemy.orm

from . import objects
from ._yaml_reader import YamlReader

logger = logging.getLogger(__name__)


class DatabaseManager:
    """In-memory object database holding one environment state snapshot."""

    def __init__(self, connection_string='sqlite:///:memory:'):
        self.engine = sqlalchemy.create_engine(connection_string, echo=False)
        self._session_factory = sqlalchemy.orm.sessionmaker(
            self.engine,
            expire_on_commit=False,
        )
        self.source = None
        objects.enable_sqlite_fks(self.engine)
        self._reset_db()

    @contextlib.contextmanager
    def session(self):
        """Create a new database session. The transaction is committed when the contextmanager exits and rolled back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load(self, path):
        path = pathlib.Path(path)
        logger.debug('Loading snapshot from %s', path)
        match path.suffix:
            case '.yml' | '.yaml':
                self._load_yaml(path)
            case _:
                raise ValueError(f'Unsupported file extension: {path}')
        self.source = path
        return path

    def environment(self, session):
        """Return the environment root, or None for an empty database."""
        return session.scalars(sqlalchemy.select(objects.Environment)).first()

    def _import(self, data):
        self._reset_db()
        with self.session() as session:
            session.add(data.environment)
        logger.debug(
            'Imported environment %r: %d machines, %d units',
            data.environment.name,
            data.machine_count,
            data.unit_count,
        )

    def _load_yaml(self, input_path):
        reader = YamlReader()
        result = reader.parse(input_path)
        self._import(result)

    def _reset_db(self):
        logger.debug('Resetting database')
        objects.Base.metadata.drop_all(self.engine)
        objects.Base.metadata.create_all(self.engine)
