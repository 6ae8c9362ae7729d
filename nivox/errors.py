# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Errors raised when decoding and querying volumes"""


class VolumeError(Exception):
    """Base class for errors in this package"""


class InvalidFormatError(VolumeError, ValueError):
    """Metadata or raw data does not describe a valid volume

    Raised for unrecognized datatype codes, and for shapes or buffer sizes
    that cannot belong to a NIfTI-1 volume.
    """


class HeaderDataError(VolumeError):
    """Malformed header fields or extension records"""


class UnsupportedDataTypeError(VolumeError):
    """Datatype is recognized, but there is no way to decode it"""

    def __init__(self, datatype):
        self.datatype = datatype
        super().__init__(f'Unsupported data type {datatype!r}')


class OutOfBoundsError(VolumeError, IndexError):
    """Coordinates outside the extents of a volume"""

    def __init__(self, coords):
        self.coords = tuple(coords)
        super().__init__(f'Coordinates {self.coords} out of bounds')


class AxisOutOfBoundsError(VolumeError, IndexError):
    """Axis not present in a volume"""

    def __init__(self, axis):
        self.axis = axis
        super().__init__(f'Axis {axis} out of bounds')
