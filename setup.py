#!/usr/bin/env python3
from setuptools import setup

setup(
    name='globber',
    version='0.2',
    packages=['globber'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.5',
    license='Apache License, Version 2.0',
    description='Extended glob pattern matching'
)
