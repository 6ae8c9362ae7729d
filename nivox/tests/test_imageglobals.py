# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for imageglobals module"""

import logging

from .. import imageglobals as igs


def test_logger():
    assert igs.logger.name == 'nivox.global'
    assert any(isinstance(h, logging.StreamHandler) for h in igs.logger.handlers)


def test_logging_output_suppressor():
    orig_handlers = list(igs.logger.handlers)
    with igs.LoggingOutputSuppressor():
        assert igs.logger.handlers == []
        igs.logger.error('Not shown')
    assert igs.logger.handlers == orig_handlers
