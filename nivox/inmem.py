# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""In-memory NIfTI1 volume

An :class:`InMemVolume` holds the raw voxel bytes of a volume, as read from a
``.nii``, ``.img`` or ``.img.gz`` file, and converts voxels on access.

The header fields are not parsed here.  Pass them in, or pass any header-like
mapping with the NIfTI1 field names (such as a ``nibabel`` ``Nifti1Header``)
to :meth:`InMemVolume.from_header`.
"""

import numpy as np

from . import imageglobals
from .errors import InvalidFormatError, UnsupportedDataTypeError
from .nifti1 import (EXTENSIONS_OFFSET, SINGLE_BYTE_CODES, SUPPORTED_CODES,
                     Nifti1Extensions, data_type_codes, get_slope_inter)
from .openers import Opener
from .volume import Volume
from .volumeutils import (MAX_NDIM, coords_to_index, endian_codes, native_code,
                          n_voxels, read_exact, shape_from_dim)


def _datatype_code(datatype):
    try:
        return data_type_codes.code[datatype]
    except (KeyError, TypeError):
        raise InvalidFormatError(f'Unrecognized data type {datatype!r}') from None


def _check_shape(shape):
    shape = tuple(int(s) for s in shape)
    if not 1 <= len(shape) <= MAX_NDIM:
        raise InvalidFormatError(f'Volumes need 1 to {MAX_NDIM} dimensions, '
                                 f'not {len(shape)}')
    if any(s < 1 for s in shape):
        raise InvalidFormatError(f'Invalid volume shape {shape}')
    return shape


def _check_bitpix(code, bitpix):
    if bitpix is not None:
        return int(bitpix)
    bitpix = data_type_codes.dtype[code].itemsize * 8
    if bitpix == 0:
        raise InvalidFormatError(
            f"No voxel size for data type '{data_type_codes.label[code]}'; "
            'pass bitpix')
    return bitpix


class InMemVolume(Volume):
    """NIfTI1 volume held in memory as raw bytes

    Parameters
    ----------
    shape : sequence of int
        extents of the 1 to 7 axes of the volume
    datatype : int, str or numpy type
        NIfTI1 datatype code, or any alias in
        :data:`~nivox.nifti1.data_type_codes`
    raw_data : bytes-like
        voxel data, in column-major (Fortran) order.  Copied into a
        ``bytearray`` owned by the volume.
    slope : float, optional
        ``scl_slope`` scaling factor
    inter : float, optional
        ``scl_inter`` intercept
    endianness : str, optional
        byte order of `raw_data`, any alias in
        :data:`~nivox.volumeutils.endian_codes`

    Raises
    ------
    InvalidFormatError
        for an unknown datatype, an invalid shape, or if the size of
        `raw_data` does not match `shape` and `datatype`
    """

    def __init__(self, shape, datatype, raw_data, slope=1.0, inter=0.0,
                 endianness=native_code):
        self._shape = _check_shape(shape)
        self._datatype = _datatype_code(datatype)
        self._endianness = endian_codes[endianness]
        self._dtype = data_type_codes.dtype[self._datatype].newbyteorder(
            self._endianness)
        # NIfTI1 stores scale factors as float32
        self._scl_slope = np.float32(slope)
        self._scl_inter = np.float32(inter)
        slope, inter = get_slope_inter(self._scl_slope, self._scl_inter)
        self._slope = 1.0 if slope is None else slope
        self._inter = 0.0 if inter is None else inter
        raw_data = bytearray(raw_data)
        itemsize = self._dtype.itemsize
        if itemsize and len(raw_data) != n_voxels(self._shape) * itemsize:
            raise InvalidFormatError(
                f'Expected {n_voxels(self._shape) * itemsize} bytes of data for '
                f'shape {self._shape}, got {len(raw_data)}')
        self._raw_data = raw_data

    @classmethod
    def from_fileobj(klass, fileobj, shape, datatype, bitpix=None, slope=1.0,
                     inter=0.0, endianness=native_code, logger=None):
        """Read a volume from the current position of `fileobj`

        The bytes at the current position must be the first voxel bytes (not
        extensions).  Exactly ``prod(shape) * bitpix / 8`` bytes are read, so
        the file position afterwards is just past the voxel data.

        Parameters
        ----------
        fileobj : file-like
            open file-like object implementing at least ``read``
        shape : sequence of int
            extents of the 1 to 7 axes of the volume
        datatype : int, str or numpy type
            NIfTI1 datatype code or alias
        bitpix : None or int, optional
            bits per voxel.  None gives the size of `datatype`
        slope : float, optional
            ``scl_slope`` scaling factor
        inter : float, optional
            ``scl_inter`` intercept
        endianness : str, optional
            byte order of the voxel data
        logger : None or logging.Logger, optional
            logger reporting the number of bytes read. Default is
            :data:`nivox.imageglobals.logger`

        Raises
        ------
        InvalidFormatError
            if `datatype` is not a known code, or if `bitpix` is None and
            `datatype` has no fixed voxel size; nothing is read in these cases
        OSError
            if `fileobj` has fewer bytes than the volume needs
        """
        code = _datatype_code(datatype)
        shape = _check_shape(shape)
        endianness = endian_codes[endianness]
        bitpix = _check_bitpix(code, bitpix)
        if logger is None:
            logger = imageglobals.logger
        n_bytes = n_voxels(shape) * bitpix // 8
        logger.debug('Reading volume of %d bytes', n_bytes)
        raw_data = read_exact(fileobj, n_bytes)
        return klass(shape, code, raw_data, slope, inter, endianness)

    @classmethod
    def from_fileobj_with_extensions(klass, fileobj, shape, datatype,
                                     vox_offset, extender, bitpix=None,
                                     slope=1.0, inter=0.0,
                                     endianness=native_code, logger=None):
        """Read extensions then volume from the current position of `fileobj`

        The file position must be just after the extender, at the absolute
        offset where extensions begin in a single file NIfTI1 image.  The
        extensions take ``vox_offset - 352`` bytes, and are followed by the
        voxel data.

        Parameters
        ----------
        fileobj : file-like
            open file-like object implementing at least ``read``
        shape, datatype : see :meth:`from_fileobj`
        vox_offset : int or float
            ``vox_offset`` header field, offset of the voxel data in the file
        extender : :class:`~nivox.nifti1.Extender`
            the four bytes preceding the extensions
        bitpix, slope, inter, endianness, logger : see :meth:`from_fileobj`

        Returns
        -------
        volume : :class:`InMemVolume`
        extensions : :class:`~nivox.nifti1.Nifti1Extensions`
        """
        # fail before reading anything
        _check_bitpix(_datatype_code(datatype), bitpix)
        ext_size = max(int(vox_offset) - EXTENSIONS_OFFSET, 0)
        extensions = Nifti1Extensions.from_fileobj(
            fileobj, ext_size, endian_codes[endianness], extender)
        volume = klass.from_fileobj(fileobj, shape, datatype, bitpix, slope,
                                    inter, endianness, logger)
        return volume, extensions

    @classmethod
    def from_filename(klass, filename, *args, **kwargs):
        """Read a volume from an image file

        NIfTI1 volume files usually have the extension ``.img`` or
        ``.img.gz``.  In the latter case, the file is decompressed as a gzip
        stream.  Other arguments as for :meth:`from_fileobj`.
        """
        with Opener(filename) as fileobj:
            return klass.from_fileobj(fileobj, *args, **kwargs)

    @classmethod
    def from_filename_with_extensions(klass, filename, *args, **kwargs):
        """Read extensions and volume from an image file

        The file is decompressed if `filename` ends with ``.gz``, and must be
        positioned as for :meth:`from_fileobj_with_extensions`, so it is
        usually a file holding only the extensions and the voxel data. Other
        arguments as for :meth:`from_fileobj_with_extensions`.
        """
        with Opener(filename) as fileobj:
            return klass.from_fileobj_with_extensions(fileobj, *args, **kwargs)

    @classmethod
    def from_header(klass, fileobj, header, endianness=None, logger=None):
        """Read a volume from `fileobj` using the fields of `header`

        Parameters
        ----------
        fileobj : file-like
            positioned at the first voxel byte
        header : mapping
            giving the NIfTI1 header fields ``dim``, ``datatype``, ``bitpix``,
            ``scl_slope`` and ``scl_inter``
        endianness : None or str, optional
            byte order of the data.  None means ``header.endianness`` if the
            header has that attribute, and native byte order otherwise
        logger : None or logging.Logger, optional
            see :meth:`from_fileobj`
        """
        return klass.from_fileobj(fileobj, logger=logger,
                                  **_header_params(header, endianness))

    @classmethod
    def from_header_with_extensions(klass, fileobj, header, extender,
                                    endianness=None, logger=None):
        """As :meth:`from_header`, reading extensions first

        `header` must also give the ``vox_offset`` field.  See
        :meth:`from_fileobj_with_extensions`.
        """
        return klass.from_fileobj_with_extensions(
            fileobj, vox_offset=header['vox_offset'], extender=extender,
            logger=logger, **_header_params(header, endianness))

    def __repr__(self):
        return (f'{self.__class__.__name__}(shape={self._shape}, '
                f"datatype='{data_type_codes.label[self._datatype]}')")

    def __eq__(self, other):
        if not isinstance(other, InMemVolume):
            return NotImplemented
        return (self._shape, self._datatype, self._endianness,
                self._scl_slope, self._scl_inter, self._raw_data) == (
                    other._shape, other._datatype, other._endianness,
                    other._scl_slope, other._scl_inter, other._raw_data)

    __hash__ = None

    @property
    def shape(self):
        return self._shape

    @property
    def endianness(self):
        return self._endianness

    def get_data_type(self):
        return self._datatype

    def get_slope_inter(self):
        """Return effective ``(slope, inter)``, ``(None, None)`` if unscaled"""
        return get_slope_inter(self._scl_slope, self._scl_inter)

    def copy(self):
        """Return copy of volume, with its own copy of the raw data"""
        self._check_data()
        return self.__class__(self._shape, self._datatype, self._raw_data,
                              self._scl_slope, self._scl_inter,
                              self._endianness)

    def _check_data(self):
        if self._raw_data is None:
            raise ValueError('Volume data has been released')

    def get_raw_data(self):
        """Return read-only view of the raw voxel bytes"""
        self._check_data()
        return memoryview(self._raw_data).toreadonly()

    def get_raw_data_mut(self):
        """Return writeable view of the raw voxel bytes

        Writes change the volume in place. Nothing else should read the
        volume while the view is in use.
        """
        self._check_data()
        return memoryview(self._raw_data)

    def into_raw_data(self):
        """Return the raw voxel bytes, releasing them from the volume

        The volume cannot be read afterwards.
        """
        self._check_data()
        raw_data, self._raw_data = self._raw_data, None
        return raw_data

    def get_f64(self, coords):
        self._check_data()
        index = coords_to_index(coords, self._shape)
        code = self._datatype
        if code in SINGLE_BYTE_CODES:
            raw = self._raw_data[index]
            if code == data_type_codes.code['int8'] and raw > 127:
                raw -= 256
        elif code in SUPPORTED_CODES:
            itemsize = self._dtype.itemsize
            raw = np.frombuffer(self._raw_data, dtype=self._dtype, count=1,
                                offset=index * itemsize)[0]
        else:
            raise UnsupportedDataTypeError(code)
        return float(raw) * self._slope + self._inter


def _header_params(header, endianness):
    if endianness is None:
        endianness = getattr(header, 'endianness', native_code)
    return dict(shape=shape_from_dim(header['dim']),
                datatype=int(header['datatype']),
                bitpix=int(header['bitpix']),
                slope=float(header['scl_slope']),
                inter=float(header['scl_inter']),
                endianness=endianness)
