# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Utility functions for voxel volumes: codes, coordinates and byte reading"""

import sys
from collections import OrderedDict
from functools import reduce
import operator

import numpy as np

from .errors import InvalidFormatError, OutOfBoundsError

sys_is_le = sys.byteorder == 'little'
native_code = sys_is_le and '<' or '>'
swapped_code = sys_is_le and '>' or '<'

_endian_codes = (  # numpy code, aliases
    ('<', 'little', 'l', 'le', 'L', 'LE'),
    ('>', 'big', 'BIG', 'b', 'be', 'B', 'BE'),
    (native_code, 'native', 'n', 'N', '=', '|', 'i', 'I'),
    (swapped_code, 'swapped', 's', 'S', '!'),
)

#: maximum number of axes of a NIfTI-1 volume
MAX_NDIM = 7


class Recoder:
    """class to return canonical code(s) from code or aliases

    >>> codes = ((1, 'label1', 'one', 'first'), (2, 'label2', 'two'))
    >>> recodes = Recoder(codes, fields=('code', 'label'))
    >>> recodes.code['first']
    1
    >>> recodes.code['label1']
    1
    >>> recodes.label[2]
    'label2'
    >>> # the first field is also available by indexing the object directly
    >>> recodes['two']
    2
    """

    def __init__(self, codes, fields=('code',), map_maker=OrderedDict):
        """Create recoder object

        Parameters
        ----------
        codes : sequence of sequences
            Each sequence defines values (codes) that are equivalent
        fields : {('code',) string sequence}, optional
            names by which elements in sequences can be accessed
        map_maker: callable, optional
            constructor for dict-like objects used to store key value pairs.
            ``map_maker()`` generates an empty mapping.  The mapping need only
            implement ``__getitem__, __setitem__, keys, values``.
        """
        self.fields = tuple(fields)
        self.field1 = {}  # a placeholder for the check below
        for name in fields:
            if name in self.__dict__:
                raise KeyError(f'Input name {name} already in object dict')
            self.__dict__[name] = map_maker()
        self.field1 = self.__dict__[fields[0]]
        self.add_codes(codes)

    def add_codes(self, code_syn_seqs):
        """Add codes to object

        Parameters
        ----------
        code_syn_seqs : sequence
            sequence of sequences, where each sequence ``S`` gives values in
            the same order as ``self.fields``.  After this call, if
            ``self.fields == ['field1', 'field2']``, then ``self.field1[S[n]]
            == S[0]`` and ``self.field2[S[n]] == S[1]`` for all n in
            0..len(S).
        """
        for code_syns in code_syn_seqs:
            for alias in code_syns:
                for field_ind, field_name in enumerate(self.fields):
                    self.__dict__[field_name][alias] = code_syns[field_ind]

    def __getitem__(self, key):
        """Return value from field1 dictionary (first column of values)"""
        return self.field1[key]

    def __contains__(self, key):
        """True if field1 in recoder contains `key`"""
        try:
            self.field1[key]
        except (KeyError, TypeError):
            return False
        return True

    def keys(self):
        """Return all available code and alias values"""
        return self.field1.keys()

    def value_set(self, name=None):
        """Return set of possible returned values for column

        By default, the column is the first column.
        """
        if name is None:
            d = self.field1
        else:
            d = self.__dict__[name]
        return set(d.values())


# Endian code aliases
endian_codes = Recoder(_endian_codes)


class DtypeMapper:
    """Specialized mapper for numpy dtypes

    Dtypes that compare equal do not always hash equal, so if a key is not
    found by hash and it is a dtype, compare it (using ==) with all known
    dtype keys.
    """

    def __init__(self):
        self._dict = {}
        self._dtype_keys = []

    def keys(self):
        return self._dict.keys()

    def values(self):
        return self._dict.values()

    def __setitem__(self, key, value):
        self._dict[key] = value
        if hasattr(key, 'subdtype'):
            self._dtype_keys.append(key)

    def __getitem__(self, key):
        try:
            return self._dict[key]
        except KeyError:
            pass
        if hasattr(key, 'subdtype'):
            for dt in self._dtype_keys:
                if key == dt:
                    return self._dict[dt]
        raise KeyError(key)


def make_dt_codes(codes_seqs):
    """Create full dt codes Recoder instance from datatype codes

    Include created numpy dtype (from numpy type) and opposite endian
    numpy dtype

    Parameters
    ----------
    codes_seqs : sequence of sequences
       contained sequences make be length 3 or 4, but must all be the same
       length. Elements are data type code, data type name, and numpy
       type (such as ``np.float32``).  The fourth element is the nifti string
       representation of the code (e.g. "NIFTI_TYPE_FLOAT32")

    Returns
    -------
    rec : ``Recoder`` instance
       Recoder that, by default, returns ``code`` when indexed with any
       of the corresponding code, name, type, dtype, or swapped dtype.
    """
    fields = ['code', 'label', 'type']
    len0 = len(codes_seqs[0])
    if len0 not in (3, 4):
        raise ValueError('Sequences must be length 3 or 4')
    if len0 == 4:
        fields.append('niistring')
    dt_codes = []
    for seq in codes_seqs:
        if len(seq) != len0:
            raise ValueError('Sequences must all have the same length')
        this_dt = np.dtype(seq[2])
        # Add swapped dtype to synonyms
        code_syns = list(seq) + [this_dt, this_dt.newbyteorder(swapped_code)]
        dt_codes.append(code_syns)
    return Recoder(dt_codes, fields + ['dtype', 'sw_dtype'], DtypeMapper)


def coords_to_index(coords, shape):
    """Column-major (Fortran order) linear index of `coords` in `shape`

    The first axis varies fastest.

    Parameters
    ----------
    coords : sequence of int
        voxel coordinates, one per axis
    shape : sequence of int
        extent of each axis

    Returns
    -------
    index : int
        linear voxel index in ``[0, prod(shape))``

    Raises
    ------
    OutOfBoundsError
        if `coords` does not have one entry per axis, or any entry is not an
        integer, is negative, or is not strictly less than its extent

    Examples
    --------
    >>> coords_to_index((3, 1, 0), (4, 4, 4))
    7
    >>> coords_to_index((2, 1, 1), (4, 4, 4))
    22
    """
    if len(coords) != len(shape):
        raise OutOfBoundsError(coords)
    index = 0
    stride = 1
    for coord, extent in zip(coords, shape):
        try:
            coord = operator.index(coord)
        except TypeError:
            raise OutOfBoundsError(coords) from None
        if not 0 <= coord < extent:
            raise OutOfBoundsError(coords)
        index += coord * stride
        stride *= int(extent)
    return index


def hot_vector(ndim, axis, value):
    """Coordinates of length `ndim`, zero except for `value` at `axis`

    >>> hot_vector(3, 1, 7)
    (0, 7, 0)
    """
    coords = [0] * ndim
    coords[axis] = value
    return tuple(coords)


def shape_from_dim(dim):
    """Volume shape from a NIfTI ``dim`` field

    ``dim[0]`` holds the number of axes, and the extents follow.  Unused
    trailing slots are dropped.

    >>> shape_from_dim([3, 4, 5, 6, 1, 1, 1, 1])
    (4, 5, 6)
    """
    ndim = int(dim[0])
    if not 1 <= ndim <= MAX_NDIM or len(dim) < ndim + 1:
        raise InvalidFormatError(f'Invalid number of dimensions {ndim}')
    return tuple(int(d) for d in dim[1:ndim + 1])


def n_voxels(shape):
    # Python ints, so no numpy integer overflow
    return reduce(operator.mul, (int(s) for s in shape), 1)


def read_exact(fileobj, n_bytes):
    """Read exactly `n_bytes` from `fileobj`, and no more

    Parameters
    ----------
    fileobj : file-like
        object implementing ``read`` and optionally ``readinto``; reading
        starts at the current position
    n_bytes : int
        number of bytes to read

    Returns
    -------
    data : bytearray
        bytes read

    Raises
    ------
    OSError
        if the stream ends before `n_bytes` could be read
    """
    data = bytearray(n_bytes)
    n_read = 0
    with memoryview(data) as view:
        while n_read < n_bytes:
            if hasattr(fileobj, 'readinto'):
                n_chunk = fileobj.readinto(view[n_read:])
            else:
                chunk = fileobj.read(n_bytes - n_read)
                n_chunk = len(chunk)
                view[n_read:n_read + n_chunk] = chunk
            if not n_chunk:
                break
            n_read += n_chunk
    if n_read != n_bytes:
        raise OSError(f"Expected {n_bytes} bytes, got {n_read} bytes from "
                      f"{getattr(fileobj, 'name', 'object')}\n"
                      " - could the file be damaged?")
    return data


def apply_read_scaling(arr, slope=None, inter=None, out_dtype=None):
    """Apply scaling in `slope` and `inter` to array `arr`

    Return data will be ``arr * slope + inter``, computed in `out_dtype` when
    that is a floating point type, and in float64 otherwise.  Integer
    `out_dtype` results are truncated and saturated as by :func:`floats_to_int`.

    Parameters
    ----------
    arr : array-like
    slope : None or float, optional
        slope value to apply to `arr` (``arr * slope + inter``).  None
        corresponds to a value of 1.0
    inter : None or float, optional
        intercept value to apply to `arr` (``arr * slope + inter``).  None
        corresponds to a value of 0.0
    out_dtype : None or dtype specifier, optional
        dtype of the returned array.  None keeps the dtype of `arr` when there
        is no scaling to do, and gives float64 otherwise.

    Returns
    -------
    ret : array
        array with scaling applied.
    """
    arr = np.asanyarray(arr)
    if slope is None:
        slope = 1.0
    if inter is None:
        inter = 0.0
    if (slope, inter) == (1, 0):
        if out_dtype is None:
            return arr
        out_dtype = np.dtype(out_dtype)
        if out_dtype.kind in 'iu' and not np.can_cast(arr.dtype, out_dtype):
            return floats_to_int(arr, out_dtype)
        return arr.astype(out_dtype)
    out_dtype = np.dtype(np.float64 if out_dtype is None else out_dtype)
    work_type = out_dtype.type if out_dtype.kind == 'f' else np.float64
    scaled = arr.astype(work_type)
    if slope != 1.0:
        scaled = scaled * work_type(slope)
    if inter != 0.0:
        scaled = scaled + work_type(inter)
    if out_dtype.kind in 'iu':
        return floats_to_int(scaled, out_dtype)
    return scaled.astype(out_dtype, copy=False)


def floats_to_int(arr, int_type):
    """Narrow array `arr` to integer type `int_type`, as :func:`float_to_int`

    Values are truncated towards zero, values out of range saturate at the
    bounds of `int_type`, and NaN gives zero.  The memory layout of `arr` is
    kept.

    >>> floats_to_int(np.array([-1.5, 3.7, 300, np.nan]), np.uint8)
    array([  0,   3, 255,   0], dtype=uint8)
    """
    info = np.iinfo(int_type)
    arr = np.asarray(np.trunc(np.asarray(arr, dtype=np.float64)))
    too_big = arr >= info.max
    too_small = arr <= info.min
    in_range = ~(too_big | too_small | np.isnan(arr))
    out = np.zeros_like(arr, dtype=int_type)
    out[in_range] = arr[in_range]
    out[too_big] = info.max
    out[too_small] = info.min
    return out


def float_to_int(value, int_type):
    """Narrow floating point `value` to a scalar of integer type `int_type`

    The value is truncated towards zero, values out of range saturate at the
    bounds of `int_type`, and NaN gives zero.

    >>> int(float_to_int(-3.7, np.int8))
    -3
    >>> int(float_to_int(300.0, np.uint8))
    255
    """
    info = np.iinfo(int_type)
    if np.isnan(value):
        return int_type(0)
    if value >= info.max:
        return int_type(info.max)
    if value <= info.min:
        return int_type(info.min)
    return int_type(int(value))
