# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Class for recording and reporting deprecations"""

from __future__ import annotations

import functools
import re
import typing as ty
import warnings

if ty.TYPE_CHECKING:
    T = ty.TypeVar('T')
    P = ty.ParamSpec('P')

_LEADING_WHITE = re.compile(r'^(\s*)')


class ExpiredDeprecationError(RuntimeError):
    """Error for expired deprecation

    Error raised when a called function or method has passed out of its
    deprecation period.
    """


def _ensure_cr(text: str) -> str:
    """Remove trailing whitespace and add carriage return"""
    return text.rstrip() + '\n'


def _add_dep_doc(old_doc: str, dep_doc: str) -> str:
    """Add deprecation message `dep_doc` to docstring in `old_doc`

    The message goes after the first paragraph of `old_doc`, with the
    indentation of the lines that follow it.
    """
    dep_doc = _ensure_cr(dep_doc)
    if not old_doc:
        return dep_doc
    old_lines = _ensure_cr(old_doc).splitlines()
    n_first = 0
    while n_first < len(old_lines) and old_lines[n_first].strip():
        n_first += 1
    if n_first + 1 >= len(old_lines):
        # nothing following first paragraph, just append message
        return '\n'.join(old_lines) + '\n\n' + dep_doc
    indent = _LEADING_WHITE.match(old_lines[n_first + 1]).group()
    dep_lines = [indent + line for line in [''] + dep_doc.splitlines() + ['']]
    return '\n'.join(old_lines[:n_first] + dep_lines + old_lines[n_first + 1:] + [''])


class Deprecator:
    """Class to make decorator marking function or method as deprecated

    The decorated function / method will:

    * Raise the given `warning_class` warning when the function / method gets
      called, up to (and including) version `until` (if specified);
    * Raise the given `error_class` error when the function / method gets
      called, when the package version is greater than version `until` (if
      specified).

    Parameters
    ----------
    version_comparator : callable
        Callable accepting string as argument, and return 1 if string
        represents a higher version than the package version, 0 if the
        version is equal, and -1 if the version is lower.
    warn_class : class, optional
        Class of warning to generate for deprecation.
    error_class : class, optional
        Class of error to generate after the `until` version.
    """

    def __init__(
        self,
        version_comparator: ty.Callable[[str], int],
        warn_class: type[Warning] = DeprecationWarning,
        error_class: type[Exception] = ExpiredDeprecationError,
    ) -> None:
        self.version_comparator = version_comparator
        self.warn_class = warn_class
        self.error_class = error_class

    def is_bad_version(self, version_str: str) -> bool:
        """Return True if `version_str` is lower than the package version"""
        return self.version_comparator(version_str) == -1

    def __call__(
        self,
        message: str,
        since: str = '',
        until: str = '',
        warn_class: type[Warning] | None = None,
        error_class: type[Exception] | None = None,
    ) -> ty.Callable[[ty.Callable[P, T]], ty.Callable[P, T]]:
        """Return decorator function function for deprecation warning / error

        Parameters
        ----------
        message : str
            Message explaining deprecation, giving possible alternatives.
        since : str, optional
            Released version at which object was first deprecated.
        until : str, optional
            Last released version at which this function will still raise a
            deprecation warning.  Versions higher than this will raise an
            error.
        warn_class : None or class, optional
            Class of warning to generate for deprecation (overrides instance
            default).
        error_class : None or class, optional
            Class of error to generate after `until` (overrides instance
            default).
        """
        exception = error_class if error_class is not None else self.error_class
        warning = warn_class if warn_class is not None else self.warn_class
        expired = bool(until) and self.is_bad_version(until)
        messages = [message]
        if (since, until) != ('', ''):
            messages.append('')
        if since:
            messages.append('* deprecated from version: ' + since)
        if until:
            messages.append(
                f"* {'Raises' if expired else 'Will raise'} "
                f'{exception} as of version: {until}'
            )
        message = '\n'.join(messages)

        def deprecator(func: ty.Callable[P, T]) -> ty.Callable[P, T]:
            @functools.wraps(func)
            def deprecated_func(*args: P.args, **kwargs: P.kwargs) -> T:
                if expired:
                    raise exception(message)
                warnings.warn(message, warning, stacklevel=2)
                return func(*args, **kwargs)

            deprecated_func.__doc__ = _add_dep_doc(deprecated_func.__doc__ or '', message)
            return deprecated_func

        return deprecator
