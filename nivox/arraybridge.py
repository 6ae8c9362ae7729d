# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Conversion of volumes to numpy arrays

:func:`into_array` maps a volume into an array with the volume's shape and
the requested element type.  The affine scaling of the values (from the
``scl_slope`` and ``scl_inter`` fields) is applied in the conversion.

Note on memory order
--------------------

NIfTI volumes are stored on disk in column major (Fortran) order.  Arrays
from an :class:`~nivox.inmem.InMemVolume` keep this memory order, rather than
the numpy default of row major (C) order.  Iterating over the first axis in
the innermost loop is the fast way to walk these arrays.
"""

import numpy as np

from .deprecated import deprecate_with_version
from .errors import UnsupportedDataTypeError
from .inmem import InMemVolume
from .nifti1 import SUPPORTED_CODES
from .volume import SliceView
from .volumeutils import apply_read_scaling


def into_array(volume, dtype=np.float64):
    """Consume `volume` into a numpy array of element type `dtype`

    Parameters
    ----------
    volume : :class:`~nivox.volume.Volume`
        volume to convert.  An :class:`~nivox.inmem.InMemVolume` hands its
        raw data over to the array, and cannot be read afterwards.
    dtype : dtype specifier, optional
        element type of the returned array.  For integer types, values are
        truncated and saturated at the type bounds, with NaN giving zero, as
        for the integer accessors of :class:`~nivox.volume.Volume`

    Returns
    -------
    arr : ndarray
        array of shape ``volume.shape``, with scaling applied

    Raises
    ------
    UnsupportedDataTypeError
        if the datatype of `volume` cannot be converted to numbers
    """
    if isinstance(volume, SliceView):
        # The whole sliced volume is converted, then the slice taken from it
        arr = into_array(volume.volume, dtype)
        slicer = (slice(None),) * volume.axis + (volume.index,)
        # a 1D volume slices to a 0D array, not a scalar
        return np.asarray(arr[slicer])
    if isinstance(volume, InMemVolume):
        code = volume.get_data_type()
        if code not in SUPPORTED_CODES:
            raise UnsupportedDataTypeError(code)
        slope, inter = volume.get_slope_inter()
        in_dtype = volume.get_data_dtype().newbyteorder(volume.endianness)
        shape = volume.shape
        raw = np.frombuffer(volume.into_raw_data(), dtype=in_dtype)
        arr = raw.reshape(shape, order='F')
        return apply_read_scaling(arr, slope, inter, dtype)
    return _array_from_voxels(volume, dtype)


def as_array(volume, dtype=np.float64):
    """Array of element type `dtype` from `volume`, leaving `volume` usable

    As :func:`into_array`, but an :class:`~nivox.inmem.InMemVolume`, or the
    volume under a slice view, is copied first.
    """
    return into_array(_copied(volume), dtype)


@deprecate_with_version('to_array is deprecated; please use into_array',
                        '0.6.0', '2.0.0')
def to_array(volume, dtype=np.float64):
    """Consume `volume` into a numpy array of element type `dtype`"""
    return into_array(volume, dtype)


def _copied(volume):
    if isinstance(volume, SliceView):
        return SliceView(_copied(volume.volume), volume.axis, volume.index)
    if isinstance(volume, InMemVolume):
        return volume.copy()
    return volume


def _array_from_voxels(volume, dtype):
    # Volumes without a buffer to convert; one voxel at a time, F order
    shape = volume.shape
    arr = np.empty(shape, dtype=np.float64, order='F')
    for rev_coords in np.ndindex(*shape[::-1]):
        coords = rev_coords[::-1]
        arr[coords] = volume.get_f64(coords)
    return apply_read_scaling(arr, out_dtype=dtype)
