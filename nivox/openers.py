# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Context manager openers for various fileobject types"""

from __future__ import annotations

import gzip
import io
import os
import typing as ty
from os.path import splitext

if ty.TYPE_CHECKING:
    from types import TracebackType

    OpenerDef = tuple[ty.Callable[..., ty.IO], tuple[str, ...]]

#: file-like classes known to hold compressed data
COMPRESSED_FILE_LIKES = (gzip.GzipFile,)


@ty.runtime_checkable
class Fileish(ty.Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


class Opener:
    r"""Class to accept, maybe open, and context-manage file-likes / filenames

    Provides context manager to close files that the constructor opened for
    you.  Filenames ending in ``.gz`` are opened as gzip streams, so reads
    return decompressed bytes.  nivox only reads volumes; writing is kept so
    tests can build plain and compressed files through the same opener.

    Parameters
    ----------
    fileish : str, os.PathLike or file-like
        if str or path, then open with suitable opening method. If file-like,
        accept as is
    \*args : positional arguments
        passed to opening method when `fileish` is a filename.  ``mode``, if
        not specified, is `rb`.  ``compresslevel``, if relevant, and not
        specified, is set from class variable ``default_compresslevel``.
    \*\*kwargs : keyword arguments
        passed to opening method when `fileish` is a filename.  Change of
        defaults as for \*args
    """

    gz_def = (gzip.open, ('mode', 'compresslevel'))
    compress_ext_map: dict[str | None, OpenerDef] = {
        '.gz': gz_def,
        None: (open, ('mode', 'buffering')),  # default
    }
    #: default compression level when writing gz files
    default_compresslevel = 1
    #: whether to ignore case looking for compression extensions
    compress_ext_icase: bool = True

    def __init__(self, fileish, *args, **kwargs):
        if isinstance(fileish, (io.IOBase, Fileish)):
            self.fobj = fileish
            self.me_opened = False
            self._name = getattr(fileish, 'name', None)
            return
        fileish = os.fspath(fileish)
        opener, arg_names = self._get_opener_argnames(fileish)
        # Get full arguments to check for mode and compresslevel
        full_kwargs = {**kwargs, **dict(zip(arg_names, args))}
        # Set default mode
        if 'mode' not in full_kwargs:
            kwargs['mode'] = 'rb'
        # Default compression level
        if 'compresslevel' in arg_names and 'compresslevel' not in full_kwargs:
            kwargs['compresslevel'] = self.default_compresslevel
        self.fobj = opener(fileish, *args, **kwargs)
        self._name = fileish
        self.me_opened = True

    def _get_opener_argnames(self, fileish: str) -> OpenerDef:
        _, ext = splitext(fileish)
        if self.compress_ext_icase:
            ext = ext.lower()
            for key in self.compress_ext_map:
                if key is None:
                    continue
                if key.lower() == ext:
                    return self.compress_ext_map[key]
        elif ext in self.compress_ext_map:
            return self.compress_ext_map[ext]
        return self.compress_ext_map[None]

    @property
    def closed(self) -> bool:
        return self.fobj.closed

    @property
    def name(self) -> str | None:
        """Return ``self.fobj.name`` or self._name if not present

        self._name will be None if object was created with a fileobj, otherwise
        it will be the filename.
        """
        return self._name

    @property
    def mode(self) -> str:
        return self.fobj.mode

    def read(self, size: int = -1, /) -> bytes:
        return self.fobj.read(size)

    def readinto(self, buffer, /) -> int | None:
        if hasattr(self.fobj, 'readinto'):
            return self.fobj.readinto(buffer)
        data = self.fobj.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)

    def write(self, b: bytes, /) -> int | None:
        return self.fobj.write(b)

    def seek(self, pos: int, whence: int = 0, /) -> int:
        return self.fobj.seek(pos, whence)

    def tell(self, /) -> int:
        return self.fobj.tell()

    def close(self, /) -> None:
        return self.fobj.close()

    def is_compressed(self) -> bool:
        """True if reads from this opener are decompressed"""
        return isinstance(self.fobj, COMPRESSED_FILE_LIKES)

    def close_if_mine(self) -> None:
        """Close ``self.fobj`` iff we opened it in the constructor"""
        if self.me_opened:
            self.close()

    def __enter__(self) -> Opener:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close_if_mine()
