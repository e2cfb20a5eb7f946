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

"""Jinja2 template loader and renderer.

Templates are read from the package's ``resources/templates/<platform>/``
directory only, so rendered scripts depend on nothing but their context.
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path

import jinja2


def _get_package_resources_dir() -> Path:
    """Return the path to the package's resources directory."""
    ref = importlib.resources.files('natfabrik') / 'resources'
    return Path(str(ref))


class Jinja2Template:
    """Load and render a packaged Jinja2 template by platform and name."""

    def __init__(self, platform: str, template_name: str) -> None:
        pkg_dir = _get_package_resources_dir() / 'templates' / platform
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(pkg_dir)),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._template = self._env.get_template(template_name)

    def render(self, context: dict) -> str:
        """Render the template with the given context variables."""
        return self._template.render(context)
