#!/usr/bin/env python3
"""
Setup script for yamltree.

yamltree reads YAML documents into configuration trees that keep comments,
anchors and styles, and writes them back. Parsing and emitting are done by
PyYAML's pure-Python event API, so no extension module is built.
"""

from setuptools import setup

setup(
    name='yamltree',
    version='0.1.0',
    description='YAML configuration trees that keep comments, anchors and styles',
    python_requires='>=3.8',
    packages=['yamltree', 'yamltree.codec'],
    package_data={'yamltree': ['__init__.pyi']},
    install_requires=['PyYAML'],
    extras_require={'test': ['pytest']},
)
