# -*- coding: utf-8; -*-

import io
import os

from setuptools import setup


metadata = {}
with io.open(os.path.join('urispan', '__metadata__.py'), 'rb') as f:
    exec(f.read(), metadata)            # pylint: disable=exec-used

with io.open('README.rst', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='URISpan',
    version=metadata['version'],
    description='Zero-copy parser for RFC 3986 URI references',
    long_description=long_description,
    license='MIT',

    install_requires=[
        # bitstring 5 no longer builds a zeroed mask from an integer length.
        'bitstring >= 3.1.4, < 5',
    ],
    extras_require={
        'test': [
            'pytest >= 3.0',
        ],
    },

    packages=[
        'urispan',
        'urispan.syntax',
        'urispan.util',
    ],
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    keywords='URI URL RFC 3986 parser IPv6',
)
