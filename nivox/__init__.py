# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##

import os

from .info import long_description as __doc__

__doc__ += """
Quickstart
==========

::

   import nivox

   vol = nivox.InMemVolume.from_filename(
       'my_file.img.gz', shape=(64, 64, 30), datatype='int16',
       slope=2.0, inter=-1.0, endianness='little')

   value = vol.get_f32((10, 20, 5))
   axial = vol.get_slice(2, 5)
   value = axial.get_f32((10, 20))

   data = nivox.into_array(vol)
"""

# module imports
from . import imageglobals

# object imports
from .arraybridge import as_array, into_array, to_array
from .errors import (AxisOutOfBoundsError, HeaderDataError, InvalidFormatError,
                     OutOfBoundsError, UnsupportedDataTypeError, VolumeError)
from .inmem import InMemVolume
from .nifti1 import (Extender, Nifti1Extension, Nifti1Extensions,
                     data_type_codes, extension_codes)
from .pkg_info import __version__
from .pkg_info import get_pkg_info as _get_pkg_info
from .volume import SliceView, Volume


def get_info():
    return _get_pkg_info(os.path.dirname(__file__))


def test(label=None, verbose=1, extra_argv=None, doctests=False, coverage=False):
    """
    Run tests for nivox using pytest

    Parameters
    ----------
    label : None
        Unused.
    verbose: int, optional
        Verbosity value for test outputs. Positive values increase verbosity, and
        negative values decrease it. Default is 1.
    extra_argv : list, optional
        List with any extra arguments to pass to pytest.
    doctests: bool, optional
        If True, run doctests in module. Default is False.
    coverage: bool, optional
        If True, report coverage of nivox code. Default is False.
        (This requires the ``pytest-cov`` plugin).

    Returns
    -------
    code : ExitCode
        Returns the result of running the tests as a ``pytest.ExitCode`` enum
    """
    import pytest

    args = []

    if label is not None:
        raise NotImplementedError("Labels cannot be set at present")

    verbose = int(verbose)
    if verbose > 0:
        args.append("-" + "v" * verbose)
    elif verbose < 0:
        args.append("-" + "q" * -verbose)

    if extra_argv:
        args.extend(extra_argv)
    if doctests:
        args.append("--doctest-modules")
    if coverage:
        args.extend(["--cov", "nivox"])

    args.extend(["--pyargs", "nivox"])

    return pytest.main(args=args)
