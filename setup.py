#!/usr/bin/env python
# -*- coding: utf-8 -*-


import os
from setuptools import setup
from setuptools import find_packages

from fastasplit import __version__, __license__


def gather_dependencies():
    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'requirements.txt'), 'r') as f_in:
        return [l.strip() for l in f_in.read().splitlines()
                if l.strip() and not l.startswith("#")]
DEPENDENCIES = gather_dependencies()


setup(
    name='fastasplit',
    version=__version__,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'fastasplit': ['config.txt']},
    include_package_data=True,
    install_requires=DEPENDENCIES,
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': [
            'fastasplit = fastasplit.split_fasta:main'
        ]
    },
    python_requires='>=3.6',
    license=__license__,
    author='Robert Schmieder',
    description='Split a FASTA file into smaller chunks without breaking records.'
)
