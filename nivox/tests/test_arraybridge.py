# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for conversion of volumes to arrays"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ..arraybridge import as_array, into_array, to_array
from ..errors import UnsupportedDataTypeError
from ..inmem import InMemVolume
from ..volume import Volume
from ..volumeutils import swapped_code
from .test_inmem import NUMERIC_TYPES, scenario_a


class ConstantVolume(Volume):
    def __init__(self, shape, value):
        self._shape = shape
        self.value = value

    @property
    def shape(self):
        return self._shape

    def get_data_type(self):
        return 16

    def get_f64(self, coords):
        # value along the first axis counts up
        return self.value + coords[0]


def _voxels(vol):
    return np.array([vol.get_f64(c) for c in np.ndindex(*vol.shape)]).reshape(
        vol.shape)


def test_scenario_a_array():
    vol = scenario_a()
    expected = _voxels(vol)
    arr = into_array(vol)
    assert arr.shape == (4, 4, 4)
    assert arr.dtype == np.float64
    assert arr[3, 1, 0] == 9
    assert arr[3, 3, 3] == 121
    assert arr[2, 1, 1] == 39
    assert_array_equal(arr, expected)
    # Column-major memory order is kept
    assert arr.flags.f_contiguous
    assert_array_equal(arr.ravel(order='F'), np.arange(0, 128, 2) - 5)
    # Data has been handed over
    with pytest.raises(ValueError):
        vol.get_f64((0, 0, 0))


@pytest.mark.parametrize('label', NUMERIC_TYPES)
def test_all_types(label):
    values = np.array([1, 2, 3, 4, 5, 6, 7, 8], dtype=label)
    for endianness in ('<', '>'):
        raw = values.astype(values.dtype.newbyteorder(endianness)).tobytes()
        vol = InMemVolume((2, 2, 2), label, raw, slope=3, inter=-1,
                          endianness=endianness)
        expected = _voxels(vol)
        assert_array_equal(as_array(vol), expected)
        assert_array_equal(into_array(vol, np.float32), expected)


def test_no_scaling():
    values = np.arange(6, dtype=np.int16)
    vol = InMemVolume((2, 3), 'int16', values.byteswap().tobytes(),
                      endianness=swapped_code)
    arr = as_array(vol, np.int16)
    assert arr.dtype == np.int16
    assert_array_equal(arr, values.reshape((2, 3), order='F'))
    # Output integer types get the scaled values cast
    vol = InMemVolume((2, 3), 'int16', values.tobytes(), slope=0.5)
    assert_array_equal(into_array(vol, np.int32), [[0, 1, 2], [0, 1, 2]])


def test_integer_output_matches_accessors():
    # Narrowing saturates as the integer accessors do, and never wraps
    vol = scenario_a()
    arr = as_array(vol, np.uint8)
    assert arr.dtype == np.uint8
    assert arr[0, 0, 0] == vol.get_u8((0, 0, 0)) == 0
    for int_type, getter in ((np.uint8, vol.get_u8), (np.int8, vol.get_i8),
                             (np.uint16, vol.get_u16), (np.int64, vol.get_i64)):
        arr = as_array(vol, int_type)
        for coords in np.ndindex(*vol.shape):
            assert arr[coords] == getter(coords)
    assert as_array(vol, np.int8)[3, 3, 3] == 121
    assert_array_equal(as_array(vol.get_slice(0, 0), np.uint8)[:, 0],
                       [0, 3, 11, 19])
    values = np.array([-3.5, np.nan, 1e6, 2.9], dtype=np.float32)
    vol = InMemVolume((4,), 'float32', values.tobytes())
    arr = into_array(vol, np.int16)
    assert_array_equal(arr, [-3, 0, 32767, 2])
    generic = ConstantVolume((2,), -7)
    assert_array_equal(into_array(generic, np.uint8), [0, 0])


def test_slices():
    vol = scenario_a()
    expected = as_array(vol)
    for axis in range(3):
        for index in range(4):
            view = vol.get_slice(axis, index)
            arr = as_array(view)
            assert arr.shape == view.shape
            assert_array_equal(arr, np.take(expected, index, axis=axis))
            assert_array_equal(arr, _voxels(view))
    view = vol.get_slice(0, 3)
    arr = into_array(view)
    assert arr[1, 0] == 9
    assert arr[3, 3] == 121
    nested = scenario_a().get_slice(2, 1).get_slice(0, 2)
    assert_array_equal(into_array(nested), expected[2, :, 1])
    # A slice of a 1D volume is a 0D array
    vol = InMemVolume((3,), 'uint8', b'\x01\x02\x03', slope=2)
    arr = into_array(vol.get_slice(0, 1))
    assert isinstance(arr, np.ndarray)
    assert arr.shape == ()
    assert arr == 4.0
    point = as_array(ConstantVolume((3, 1), 5).get_slice(0, 2).get_slice(0, 0))
    assert isinstance(point, np.ndarray)
    assert point.shape == ()
    assert point == 7


def test_as_array_keeps_volume():
    vol = scenario_a()
    as_array(vol)
    as_array(vol.get_slice(1, 1))
    assert vol.get_f64((3, 1, 0)) == 9


def test_unsupported():
    vol = InMemVolume((2,), 'RGB', b'\x00' * 6)
    with pytest.raises(UnsupportedDataTypeError):
        into_array(vol)
    with pytest.raises(UnsupportedDataTypeError):
        as_array(vol)
    # failure does not release the data
    assert bytes(vol.get_raw_data()) == b'\x00' * 6


def test_generic_volume():
    vol = ConstantVolume((3, 2), 10)
    arr = into_array(vol)
    assert_array_equal(arr, [[10, 10], [11, 11], [12, 12]])
    assert arr.flags.f_contiguous
    assert_array_equal(as_array(vol.get_slice(0, 2), np.uint8), [12, 12])


def test_to_array():
    vol = scenario_a()
    with pytest.deprecated_call():
        arr = to_array(vol)
    assert arr[3, 1, 0] == 9
    assert 'deprecated' in to_array.__doc__
