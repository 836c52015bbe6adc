#!/usr/bin/env python3

import ast
import setuptools

with open('crusta/__init__.py') as file:
    long_description = ast.get_docstring(ast.parse(file.read()))

setuptools.setup(
    name='crusta',
    version='1.0.0',
    description='crusta - managing the execution of external programs',
    long_description=long_description,
    long_description_content_type='text/plain',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    install_requires=['funcpipes'],
    extras_require={'test': ['pytest']},
)
