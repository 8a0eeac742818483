import pytest

from pngme.core import Chunk
from pngme.fields import StructField, StringField
from pngme.properties import Dependency
from pngme.streams import Stream
from pngme.exceptions import TruncatedException


class TLV(Chunk):
    type   = StructField('I')
    length = StructField('I')
    data   = StringField(Dependency('.length'))
    extra  = StructField('I')


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.a == 0xbad
    assert dummy.b == b'\x00' * 0x10
    assert dummy.c == 0xdeadbeef

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.raw == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )


def test_meta():
    class Dummy(Chunk):
        field = StructField('i')

        def method(self):
            return 'kebab'

    assert Dummy.get_ordered_fields_name() == ['field']
    assert isinstance(Dummy.field, StructField)
    assert Dummy.field.name == 'field'
    assert Dummy(field=1).method() == 'kebab'


def test_fields_are_read_only():
    class Dummy(Chunk):
        a = StructField('I', default=1)

    dummy = Dummy()

    with pytest.raises(AttributeError):
        dummy.a = 2

    assert dummy.a == 1


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son.unpack(Stream(b'A' * 16 + field_b_value + field_c_value))

    assert Son.get_ordered_fields_name() == [
        'field_a', 'field_b', 'field_c',
    ]

    # check values make sense
    assert son.field_b == 0x04030201, f'field_b is {son.field_b:x}'
    assert son.field_c == field_c_value


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'), default=b'kebab')

    example = Example()

    assert example.sz == 5
    assert example.data == b'kebab'

    example = Example(data=b'miao')

    assert example.sz == 4
    assert example.raw == b'\x04\x00\x00\x00miao'


def test_unpack_dependencies():
    tlv = TLV.unpack(Stream(
        b'\x01\x00\x00\x00'
        b'\x0f\x00\x00\x00'
        b'\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41\x41'
        b'\x0a\x0b\x0c\x0d'
    ))

    assert tlv.type == 0x01
    assert tlv.length == 0x0f
    assert tlv.data == b'\x41' * 0x0f
    assert tlv.extra == 0x0d0c0b0a
    assert tlv.size == 4 + 4 + 0x0f + 4


def test_build_derives_dependencies():
    tlv = TLV(type=1, data=b'\x42\x42\x42', extra=0x0d0c0b0a)

    assert tlv.length == 0x03
    assert tlv.pack() == (
        b'\x01\x00\x00\x00'
        b'\x03\x00\x00\x00'
        b'\x42\x42\x42'
        b'\x0a\x0b\x0c\x0d'
    )

    assert TLV.unpack(Stream(tlv.pack())) == tlv


def test_unpack_error_has_chain():
    with pytest.raises(TruncatedException) as excinfo:
        TLV.unpack(Stream(
            b'\x01\x00\x00\x00'
            b'\x0f\x00\x00\x00'
            b'\x41\x41'
        ))

    assert excinfo.value.chain == ['data']
    assert 'data' in str(excinfo.value)


def test_build_wrong_arguments():
    with pytest.raises(TypeError):
        TLV(type=1, data=b'', extra=0, kebab=1)

    with pytest.raises(TypeError):
        TLV(data=b'AAAA')

    with pytest.raises(ValueError):
        TLV(type=-1, data=b'', extra=0)


def test_min_size():
    assert TLV.min_size() == 12


def test_equality():
    a = TLV(type=1, data=b'AAAA', extra=2)
    b = TLV(type=1, data=b'AAAA', extra=2)
    c = TLV(type=1, data=b'AAAB', extra=2)

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert repr(a) == '<TLV(type=0x1,length=0x4,data=b\'AAAA\',extra=0x2)>'
