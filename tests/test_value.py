import copy
import pickle
import sys

import pytest

from rpncalc.rpn import Bool, Int, Value


@pytest.mark.parametrize(
    'a,             b,             expected', [
    (Int(1),        Int(1),        True),
    (Int(1),        Int(2),        False),
    (Bool(True),    Bool(True),    True),
    (Bool(True),    Bool(False),   False),
    # payloads that Python itself considers equal
    (Int(1),        Bool(True),    False),
    (Int(0),        Bool(False),   False),
])
def test_equality(a, b, expected):
    assert (a == b) == expected
    assert (a != b) != expected


@pytest.mark.parametrize(
    'a,             b', [
    (Int(0),        Int(12)),
    (Int(-3),       Int(0)),
    (Bool(False),   Bool(True)),
    # ints always order before bools
    (Int(100),      Bool(False)),
    (Int(1),        Bool(True)),
])
def test_ordering(a, b):
    assert a < b
    assert a <= b
    assert b > a
    assert b >= a
    assert not b < a


def test_hash():
    assert len({Int(1), Int(1), Bool(True), Bool(True)}) == 2


@pytest.mark.parametrize(
    'value,         text', [
    (Int(25),       'Int(25)'),
    (Int(-1),       'Int(-1)'),
    (Bool(True),    'Bool(true)'),
    (Bool(False),   'Bool(false)'),
])
def test_repr(value, text):
    assert repr(value) == text


@pytest.mark.parametrize(
    'variant,  payload', [
    (Int,      True),
    (Int,      '1'),
    (Int,      1.0),
    (Bool,     1),
    (Bool,     None),
])
def test_payload_type(variant, payload):
    with pytest.raises(TypeError):
        variant(payload)


def test_immutable():
    value = Int(1)
    with pytest.raises(AttributeError):
        value.value = 2
    assert value == Int(1)


def test_abstract_value():
    with pytest.raises(TypeError):
        Value(1)


@pytest.mark.parametrize('value', [Int(-7), Bool(True), Int(2**100)])
def test_copy_and_pickle(value):
    assert copy.copy(value) == value
    assert copy.deepcopy(value) == value
    assert pickle.loads(pickle.dumps(value)) == value


INT_DIGITS = getattr(sys, 'get_int_max_str_digits', lambda: 0)()


@pytest.mark.skipif(INT_DIGITS == 0, reason='no int string conversion limit')
@pytest.mark.parametrize('sign', [1, -1])
def test_repr_huge_int(sign):
    # one digit past what str() will convert
    payload = sign * 10 ** INT_DIGITS
    expected = '{}<{}-bit int>'.format('-' if sign < 0 else '', payload.bit_length())
    assert repr(Int(payload)) == 'Int({})'.format(expected)
