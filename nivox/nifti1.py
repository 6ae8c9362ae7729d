# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""NIfTI1 datatype codes, scaling rules and header extensions

NIfTI1 format defined at http://nifti.nimh.nih.gov/nifti-1/
"""
import warnings

import numpy as np

from .errors import HeaderDataError
from .volumeutils import Recoder, endian_codes, make_dt_codes, read_exact

#: absolute offset in bytes of the first extension record in a NIfTI1 file
EXTENSIONS_OFFSET = 352

# No portable numpy types for these; opaque blocks of the right size
_float128t = np.dtype('V16')
_complex256t = np.dtype('V32')

_dtdefs = (  # code, label, dtype definition, niistring
    (0, 'none', np.void, ''),
    (1, 'binary', np.void, ''),
    (2, 'uint8', np.uint8, 'NIFTI_TYPE_UINT8'),
    (4, 'int16', np.int16, 'NIFTI_TYPE_INT16'),
    (8, 'int32', np.int32, 'NIFTI_TYPE_INT32'),
    (16, 'float32', np.float32, 'NIFTI_TYPE_FLOAT32'),
    (32, 'complex64', np.complex64, 'NIFTI_TYPE_COMPLEX64'),
    (64, 'float64', np.float64, 'NIFTI_TYPE_FLOAT64'),
    (128, 'RGB', np.dtype([('R', 'u1'),
                           ('G', 'u1'),
                           ('B', 'u1')]), 'NIFTI_TYPE_RGB24'),
    (255, 'all', np.void, ''),
    (256, 'int8', np.int8, 'NIFTI_TYPE_INT8'),
    (512, 'uint16', np.uint16, 'NIFTI_TYPE_UINT16'),
    (768, 'uint32', np.uint32, 'NIFTI_TYPE_UINT32'),
    (1024, 'int64', np.int64, 'NIFTI_TYPE_INT64'),
    (1280, 'uint64', np.uint64, 'NIFTI_TYPE_UINT64'),
    (1536, 'float128', _float128t, 'NIFTI_TYPE_FLOAT128'),
    (1792, 'complex128', np.complex128, 'NIFTI_TYPE_COMPLEX128'),
    (2048, 'complex256', _complex256t, 'NIFTI_TYPE_COMPLEX256'),
    (2304, 'RGBA', np.dtype([('R', 'u1'),
                             ('G', 'u1'),
                             ('B', 'u1'),
                             ('A', 'u1')]), 'NIFTI_TYPE_RGBA32'),
)

# Make full code alias bank, including dtype column
data_type_codes = make_dt_codes(_dtdefs)

#: datatype codes that can be decoded to numbers voxel by voxel
SUPPORTED_CODES = frozenset(data_type_codes.code[label] for label in (
    'uint8', 'int8', 'uint16', 'int16', 'uint32', 'int32',
    'uint64', 'int64', 'float32', 'float64'))

#: single byte datatype codes, for which byte order does not matter
SINGLE_BYTE_CODES = frozenset((data_type_codes.code['uint8'],
                               data_type_codes.code['int8']))


def get_slope_inter(slope, inter):
    """Effective data scaling (slope) and DC offset (intercept)

    Parameters
    ----------
    slope : float
        ``scl_slope`` field value
    inter : float
        ``scl_inter`` field value

    Returns
    -------
    slope : None or float
       scaling (slope).  None if there is no valid scaling from these
       fields
    inter : None or float
       offset (intercept). None if there is no valid scaling

    Examples
    --------
    >>> get_slope_inter(1, -5)
    (1.0, -5.0)
    >>> get_slope_inter(0, 10)
    (None, None)
    >>> get_slope_inter(np.nan, 0)
    (None, None)
    >>> get_slope_inter(1, np.inf) #doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
        ...
    HeaderDataError: Valid slope but invalid intercept inf
    """
    # float64 scalefactors, although they are stored as float32
    slope = float(slope)
    inter = float(inter)
    if slope == 0 or not np.isfinite(slope):
        return None, None
    if not np.isfinite(inter):
        raise HeaderDataError(f'Valid slope but invalid intercept {inter}')
    return slope, inter


class Extender:
    """The four bytes following the 348 byte header

    A non-zero first byte flags that extension records follow.
    """

    def __init__(self, extension=(0, 0, 0, 0)):
        extension = tuple(int(e) for e in extension)
        if len(extension) != 4:
            raise ValueError('Extender needs exactly 4 bytes')
        self.extension = extension

    @classmethod
    def from_fileobj(klass, fileobj):
        """Read extender from current position in `fileobj`"""
        return klass(read_exact(fileobj, 4))

    def has_extensions(self):
        return self.extension[0] != 0

    def __eq__(self, other):
        return self.extension == getattr(other, 'extension', None)

    def __repr__(self):
        return f'Extender({self.extension})'


class Nifti1Extension:
    """Baseclass for NIfTI1 header extensions.

    Content is kept as the raw bytes read from the file.
    """

    def __init__(self, code, content):
        """
        Parameters
        ----------
        code : int or str
          Canonical extension code as defined in the NIfTI standard, given
          either as integer or corresponding label
          (see :data:`~nivox.nifti1.extension_codes`)
        content : bytes
          Extension content as read from the NIfTI file header.
        """
        try:
            self._code = extension_codes.code[code]
        except KeyError:
            # unknown codes are kept as they are
            self._code = int(code)
        self._content = content

    def get_code(self):
        """Return the canonical extension type code."""
        return self._code

    def get_content(self):
        """Return the extension content."""
        return self._content

    def get_sizeondisk(self):
        """Return the size of the extension in the NIfTI file."""
        # need raw value size plus 8 bytes for esize and ecode
        size = len(self._content) + 8
        # extensions size has to be a multiple of 16 bytes
        if size % 16:
            size += 16 - (size % 16)
        return size

    def __repr__(self):
        try:
            code = extension_codes.label[self._code]
        except KeyError:
            code = self._code
        return f'{self.__class__.__name__}({code!r}, {self._content!r})'

    def __eq__(self, other):
        return (self._code, self._content) == (other._code, other._content)

    def __ne__(self, other):
        return not self == other


# NIfTI header extension type codes (ECODE)
# see nifti1_io.h for a complete list of all known extensions and
# references to their description or contacts of the respective
# initiators
extension_codes = Recoder((
    (0, 'ignore'),
    (2, 'dicom'),
    (4, 'afni'),
    (6, 'comment'),
    (8, 'xcede'),
    (10, 'jimdiminfo'),
    (12, 'workflow_fwds'),
    (14, 'freesurfer'),
    (16, 'pypickle'),
    (18, 'mind_ident'),
    (20, 'b_value'),
    (22, 'spherical_direction'),
    (24, 'dt_component'),
    (26, 'shc_degreeorder'),
    (28, 'voxbo'),
    (30, 'caret'),
), fields=('code', 'label'))


class Nifti1Extensions(list):
    """Simple extension collection, implemented as a list-subclass."""

    def count(self, ecode):
        """Returns the number of extensions matching a given *ecode*.

        Parameters
        ----------
        ecode : int | str
            The ecode can be specified either literal or as numerical value.
        """
        code = extension_codes.code[ecode]
        return sum(1 for e in self if e.get_code() == code)

    def get_codes(self):
        """Return a list of the extension code of all available extensions"""
        return [e.get_code() for e in self]

    def get_sizeondisk(self):
        """Return the size of the complete header extensions in the file."""
        return sum(e.get_sizeondisk() for e in self)

    def __repr__(self):
        return 'Nifti1Extensions(%s)' % ', '.join(str(e) for e in self)

    @classmethod
    def from_fileobj(klass, fileobj, size, endianness='<', extender=None):
        """Read header extensions from a fileobj

        Exactly `size` bytes are consumed from `fileobj`, so that the file
        position ends up at the first byte of voxel data.

        Parameters
        ----------
        fileobj : file-like object
            We begin reading the extensions at the current file position
        size : int
            Number of bytes taken by the extensions.
        endianness : str, optional
            byte order of the ``esize`` and ``ecode`` fields, any alias in
            :data:`~nivox.volumeutils.endian_codes`
        extender : None or :class:`Extender`, optional
            If given and it flags no extensions, the `size` bytes are skipped
            without parsing.

        Returns
        -------
        An extension list. This list might be empty in case no extensions
        were present in fileobj.
        """
        extensions = klass()
        size = max(int(size), 0)
        if extender is not None and not extender.has_extensions():
            read_exact(fileobj, size)
            return extensions
        int_dtype = np.dtype(endian_codes[endianness] + 'i4')
        # each extension is a multiple of 16 bytes
        while size >= 16:
            # the next 8 bytes should have esize and ecode
            ext_def = fileobj.read(8)
            if len(ext_def) != 8:
                raise HeaderDataError('failed to read extension header')
            esize, ecode = (int(v) for v in np.frombuffer(ext_def, dtype=int_dtype))
            if esize < 8 or esize > size:
                raise HeaderDataError(f'Invalid extension size {esize}')
            if esize % 16:
                warnings.warn(
                    'Extension size is not a multiple of 16 bytes; '
                    'Assuming size is correct and hoping for the best',
                    UserWarning)
            # read extension itself; esize includes the 8 bytes already read
            try:
                evalue = bytes(read_exact(fileobj, esize - 8))
            except OSError as err:
                raise HeaderDataError('failed to read extension content') from err
            size -= esize
            # store raw extension content, but strip trailing NULL chars
            extensions.append(Nifti1Extension(ecode, evalue.rstrip(b'\x00')))
        # padding after the last record still belongs to the extensions
        if size:
            read_exact(fileobj, size)
        return extensions
