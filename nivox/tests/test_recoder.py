# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the nivox package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests recoder class"""

import numpy as np
import pytest

from ..nifti1 import data_type_codes
from ..volumeutils import DtypeMapper, Recoder, make_dt_codes, native_code, swapped_code


def test_recoder_code_label():
    codes = ((1, 'one', '1', 'first'), (2, 'two'))
    rc = Recoder(codes)
    assert rc.code[1] == 1
    assert rc.code['one'] == 1
    assert rc.code['first'] == 1
    with pytest.raises(KeyError):
        rc.code['three']
    with pytest.raises(AttributeError):
        rc.label
    rc = Recoder(codes, ['code1', 'label'])
    with pytest.raises(AttributeError):
        rc.code
    assert rc.code1['first'] == 1
    assert rc.label[1] == 'one'
    assert rc.label['first'] == 'one'
    # Don't allow names already in the object
    with pytest.raises(KeyError):
        Recoder(codes, ['field1'])


def test_add_codes():
    rc = Recoder(((1, 'one'), (2, 'two')))
    with pytest.raises(KeyError):
        rc.code['three']
    rc.add_codes(((3, 'three'), (1, 'number 1')))
    assert rc.code['three'] == 3
    assert rc.code['number 1'] == 1


def test_sugar():
    codes = ((1, 'one', '1', 'first'), (2, 'two'))
    rc = Recoder(codes, fields=('code1', 'label'))
    assert rc.code1 == rc.field1
    assert rc[1] == rc.field1[1]
    assert rc['two'] == 2
    assert set(rc.keys()) == {1, 'one', '1', 'first', 2, 'two'}
    assert rc.value_set() == {1, 2}
    assert rc.value_set('label') == {'one', 'two'}
    assert 'one' in rc
    assert 'three' not in rc
    # unhashable keys are not in the recoder either
    assert [1] not in rc


def test_dtmapper():
    # dict-like that will lookup on dtypes, even if they don't hash properly
    d = DtypeMapper()
    with pytest.raises(KeyError):
        d[1]
    d[1] = 'something'
    assert d[1] == 'something'
    canonical_dt = np.dtype('int32')
    d[canonical_dt] = 'spam'
    assert d[canonical_dt.newbyteorder('=')] == 'spam'
    assert d[canonical_dt.newbyteorder(native_code)] == 'spam'
    d = DtypeMapper()
    sw_dt = canonical_dt.newbyteorder(swapped_code)
    d[sw_dt] = 'spam'
    with pytest.raises(KeyError):
        d[canonical_dt]
    assert d[sw_dt] == 'spam'


def test_make_dt_codes():
    rc = make_dt_codes(((2, 'uint8', np.uint8), (16, 'float32', np.float32)))
    assert rc.fields == ('code', 'label', 'type', 'dtype', 'sw_dtype')
    assert rc.code[np.dtype(np.float32).newbyteorder(swapped_code)] == 16
    assert rc.label[np.uint8] == 'uint8'
    with pytest.raises(ValueError):
        make_dt_codes(((2, 'uint8'),))
    with pytest.raises(ValueError):
        make_dt_codes(((2, 'uint8', np.uint8), (4, 'int16', np.int16, 'X')))


def test_data_type_codes():
    for code, label, np_type in ((2, 'uint8', np.uint8),
                                 (256, 'int8', np.int8),
                                 (4, 'int16', np.int16),
                                 (512, 'uint16', np.uint16),
                                 (8, 'int32', np.int32),
                                 (768, 'uint32', np.uint32),
                                 (1024, 'int64', np.int64),
                                 (1280, 'uint64', np.uint64),
                                 (16, 'float32', np.float32),
                                 (64, 'float64', np.float64)):
        assert data_type_codes.code[label] == code
        assert data_type_codes.code[np_type] == code
        assert data_type_codes.label[code] == label
        assert data_type_codes.dtype[code] == np.dtype(np_type)
    assert data_type_codes.niistring[16] == 'NIFTI_TYPE_FLOAT32'
    assert data_type_codes.dtype['RGB'].itemsize == 3
    assert data_type_codes.dtype['RGBA'].itemsize == 4
    assert data_type_codes.dtype['float128'].itemsize == 16
    assert data_type_codes.dtype['complex256'].itemsize == 32
    assert data_type_codes.dtype['none'].itemsize == 0
    assert 3 not in data_type_codes
