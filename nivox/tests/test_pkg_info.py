# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Testing package info"""

from unittest import mock

import pytest

import nivox
from nivox.pkg_info import cmp_pkg_version


def test_pkg_info():
    info = nivox.get_info()
    assert info['version'] == nivox.__version__
    assert info['pkg_path'].endswith('nivox')
    assert set(info) == {'pkg_path', 'version', 'sys_version',
                         'sys_executable', 'sys_platform', 'np_version'}


def test_version():
    assert nivox.pkg_info.__version__ == nivox.__version__
    assert nivox.__version__ == nivox._version.__version__


def test_cmp_pkg_version():
    assert cmp_pkg_version(nivox.__version__) == 0
    assert cmp_pkg_version('0.0') == -1
    assert cmp_pkg_version('1000.1000.1') == 1
    # Check dev/RC sequence
    seq = ('3.0.0dev', '3.0.0rc1', '3.0.0rc1.post.dev', '3.0.0rc2', '3.0.0')
    for stage1, stage2 in zip(seq[:-1], seq[1:]):
        assert cmp_pkg_version(stage1, stage2) == -1
        assert cmp_pkg_version(stage2, stage1) == 1


@pytest.mark.parametrize(
    'test_ver, pkg_ver, exp_out',
    [
        ('1.0', '1.0', 0),
        ('1.0.0', '1.0', 0),
        ('1.2', '1.1', 1),
        ('1.1', '1.2', -1),
        ('1.1', '1.1dev', 1),
        ('1.2.1rc1', '1.2.1', -1),
        ('1.2.0.post1', '1.2.0', 1),
    ],
)
def test_cmp_pkg_version_1(test_ver, pkg_ver, exp_out):
    assert cmp_pkg_version(test_ver, pkg_ver) == exp_out


@pytest.mark.parametrize('args', [['foo.2', '1.0'], ['1.0', 'foo.2']])
def test_cmp_pkg_version_error(args):
    with pytest.raises(ValueError):
        cmp_pkg_version(*args)


@pytest.mark.parametrize(
    'verbose, v_args', [(-2, ['-qq']), (-1, ['-q']), (0, []), (1, ['-v']), (2, ['-vv'])]
)
@pytest.mark.parametrize('doctests', (True, False))
@pytest.mark.parametrize('coverage', (True, False))
def test_nivox_test(verbose, v_args, doctests, coverage):
    expected_args = v_args + ['--doctest-modules', '--cov', 'nivox', '--pyargs', 'nivox']
    if not doctests:
        expected_args.remove('--doctest-modules')
    if not coverage:
        expected_args[-4:-2] = []

    with mock.patch('pytest.main') as pytest_main:
        nivox.test(verbose=verbose, doctests=doctests, coverage=coverage)

    args, kwargs = pytest_main.call_args
    assert args == ()
    assert kwargs == {'args': expected_args}


def test_nivox_test_errors():
    with pytest.raises(NotImplementedError):
        nivox.test(label='fast')
    with pytest.raises(ValueError):
        nivox.test(verbose='-v')
