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

from setuptools import find_namespace_packages, setup

setup(
    name='natfabrik',
    version='0.3.0',
    description='Expose services running in nested containers through their gateway machine',
    author='Linuxfabrik GmbH, Zurich/Switzerland',
    author_email='info@linuxfabrik.ch',
    license='GPL-2.0-or-later',
    python_requires='>=3.11',
    package_dir={'': 'src'},
    packages=find_namespace_packages(where='src', include=['natfabrik*']),
    package_data={'natfabrik': ['resources/templates/*/*.j2']},
    install_requires=[
        'jinja2>=3.1',
        'pyyaml>=6.0',
        'sqlalchemy>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
        'docs': ['myst-parser', 'sphinx', 'sphinx-rtd-theme'],
    },
    entry_points={
        'console_scripts': [
            'natfabrik-expose=natfabrik.cli.nat_expose:main',
            'natfabrik-outbound=natfabrik.cli.nat_outbound:main',
        ],
    },
)
