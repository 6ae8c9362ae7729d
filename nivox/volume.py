# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Voxel volume API, and views over single slices of volumes

A volume is anything giving a ``shape``, a datatype code, and voxel values for
voxel coordinates.  Subclasses of :class:`Volume` need only implement
``shape``, ``get_data_type`` and ``get_f64``; the other accessors convert the
double precision value.

Coordinates are sequences of integers, one per axis, and are checked against
the volume shape on each access:

>>> import numpy as np
>>> from nivox.inmem import InMemVolume
>>> vol = InMemVolume((2, 3), 'uint8', bytes(range(6)), slope=2)
>>> vol.get_f64((1, 2))
10.0
>>> vol.get_slice(0, 1).get_f64((2,))
10.0
"""

import operator

import numpy as np

from .errors import AxisOutOfBoundsError, OutOfBoundsError
from .nifti1 import data_type_codes
from .volumeutils import float_to_int, hot_vector


class Volume:
    """Base class for NIfTI volumes exposed as multi-dimensional voxel arrays

    Each ``get_<type>`` accessor fetches a single voxel value at the given
    voxel coordinates, with all conversions and scaling applied.  Using these
    methods to traverse the whole volume is inefficient; prefer
    :func:`nivox.arraybridge.into_array` for that.
    """

    @property
    def shape(self):
        """Extents of the volume, one per axis"""
        raise NotImplementedError

    @property
    def ndim(self):
        return len(self.shape)

    def get_data_type(self):
        """Return NIfTI datatype code of the voxel values"""
        raise NotImplementedError

    def get_data_dtype(self):
        """Return numpy dtype of the voxel values, in native byte order"""
        return data_type_codes.dtype[self.get_data_type()]

    def get_f64(self, coords):
        """Voxel value at `coords` as a double precision float

        Raises
        ------
        OutOfBoundsError
            if `coords` are outside the volume
        """
        raise NotImplementedError

    def get_f32(self, coords):
        return np.float32(self.get_f64(coords))

    def get_u8(self, coords):
        return float_to_int(self.get_f64(coords), np.uint8)

    def get_i8(self, coords):
        return float_to_int(self.get_f64(coords), np.int8)

    def get_u16(self, coords):
        return float_to_int(self.get_f64(coords), np.uint16)

    def get_i16(self, coords):
        return float_to_int(self.get_f64(coords), np.int16)

    def get_u32(self, coords):
        return float_to_int(self.get_f64(coords), np.uint32)

    def get_i32(self, coords):
        return float_to_int(self.get_f64(coords), np.int32)

    def get_u64(self, coords):
        return float_to_int(self.get_f64(coords), np.uint64)

    def get_i64(self, coords):
        return float_to_int(self.get_f64(coords), np.int64)

    def get_slice(self, axis, index):
        """View of this volume at `index` along `axis`

        Returns
        -------
        view : :class:`SliceView`
            volume with one axis less than this one
        """
        return SliceView(self, axis, index)


class SliceView(Volume):
    """A view over a single slice of another volume

    The view stores no voxel data.  Each accessor inserts the sliced index
    into the coordinates it is given, and asks the sliced volume.  The sliced
    volume may itself be a ``SliceView``.

    Parameters
    ----------
    volume : :class:`Volume`
        volume to slice; the view keeps a reference to it
    axis : int
        axis of `volume` to remove
    index : int
        position along `axis`

    Raises
    ------
    AxisOutOfBoundsError
        if `volume` has no axis `axis`, or `axis` is not an integer
    OutOfBoundsError
        if `index` is outside `axis`.  The error coordinates are zero except
        for `index` at `axis`.  Also raised if `index` is not an integer.
    """

    def __init__(self, volume, axis, index):
        shape = list(volume.shape)
        try:
            axis = operator.index(axis)
        except TypeError:
            raise AxisOutOfBoundsError(axis) from None
        if not 0 <= axis < len(shape):
            raise AxisOutOfBoundsError(axis)
        try:
            index = operator.index(index)
        except TypeError:
            raise OutOfBoundsError(hot_vector(len(shape), axis, index)) from None
        if not 0 <= index < shape[axis]:
            raise OutOfBoundsError(hot_vector(len(shape), axis, index))
        del shape[axis]
        self.volume = volume
        self.axis = axis
        self.index = index
        self._shape = tuple(shape)

    def __repr__(self):
        return (f'{self.__class__.__name__}({self.volume!r}, '
                f'axis={self.axis}, index={self.index})')

    @property
    def shape(self):
        return self._shape

    def get_data_type(self):
        return self.volume.get_data_type()

    def _source_coords(self, coords):
        coords = list(coords)
        coords.insert(self.axis, self.index)
        return coords

    def get_f64(self, coords):
        return self.volume.get_f64(self._source_coords(coords))

    def get_f32(self, coords):
        return self.volume.get_f32(self._source_coords(coords))

    def get_u8(self, coords):
        return self.volume.get_u8(self._source_coords(coords))

    def get_i8(self, coords):
        return self.volume.get_i8(self._source_coords(coords))

    def get_u16(self, coords):
        return self.volume.get_u16(self._source_coords(coords))

    def get_i16(self, coords):
        return self.volume.get_i16(self._source_coords(coords))

    def get_u32(self, coords):
        return self.volume.get_u32(self._source_coords(coords))

    def get_i32(self, coords):
        return self.volume.get_i32(self._source_coords(coords))

    def get_u64(self, coords):
        return self.volume.get_u64(self._source_coords(coords))

    def get_i64(self, coords):
        return self.volume.get_i64(self._source_coords(coords))
