#!/usr/bin/env python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""
Setuptools entrypoint

The version is set statically in ``nivox/_version.py``.

This file should not be run directly. To install, use:

    pip install .

To install with the test dependencies, use:

    pip install .[test]

"""

import re
from os.path import dirname, join as pjoin

from setuptools import setup


def get_version():
    with open(pjoin(dirname(__file__), 'nivox', '_version.py')) as fobj:
        return re.search(r"__version__ = '([^']+)'", fobj.read()).group(1)


def get_long_description():
    # info.py only defines strings, and cannot import nivox
    info = {}
    with open(pjoin(dirname(__file__), 'nivox', 'info.py')) as fobj:
        exec(fobj.read(), info)
    return info['long_description']


setup(
    name='nivox',
    version=get_version(),
    description='Voxel access to NIfTI1 volumes',
    long_description=get_long_description(),
    long_description_content_type='text/x-rst',
    license='MIT License',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
    ],
    python_requires='>=3.9',
    install_requires=[
        'numpy >=1.22',
        'packaging >=20',
    ],
    extras_require={
        'test': [
            'pytest >=6',
            'pytest-cov',
        ],
    },
    packages=['nivox', 'nivox.testing', 'nivox.tests'],
)
