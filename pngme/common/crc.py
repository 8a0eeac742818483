'''
We are implementing fields to handle CRC calculation.
'''
from zlib import crc32 as _zlib_crc32

from .. import fields
from ..exceptions import ChecksumException


# check value of the algorithm, i.e. the CRC of b'123456789'
CHECK_VALUE = 0xcbf43926


def crc32(data: bytes) -> int:
    '''CRC-32/ISO-HDLC of the data, as unsigned 32 bits integer.'''
    return _zlib_crc32(data) & 0xffffffff


class CRCField(fields.StructField):
    """standard CRC methods with pre and post conditioning, as defined by ISO 3309 [ISO-3309]
    or ITU-T V.42 [ITU-V42]. The CRC polynomial employed is

      x^32+x^26+x^23+x^22+x^16+x^12+x^11+x^10+x^8+x^7+x^5+x^4+x^2+x+1

    The 32-bit CRC register is initialized to all 1's, and then the data from each byte is processed
    from the least significant bit (1) to the most significant bit (128). After all the data bytes are processed,
    the CRC register is inverted (its ones complement is taken). This value is transmitted (stored in the file)
    MSB first.

    The value is never taken from the user: it's calculated over the packed
    fields named in the constructor when the chunk is built, and when unpacking
    the stored value is checked against the calculated one.

    See <https://www.w3.org/TR/PNG-Structure.html#CRC-algorithm>.
    """

    def __init__(self, fields, *args, **kwargs):
        super().__init__('I', *args, **kwargs)
        self.fields = fields

    def calculate(self, chunk):
        value = b''
        for field_name in self.fields:
            field = chunk.get_field(field_name)
            value += field.pack(chunk.get_value(field_name), chunk)

        return crc32(value)

    def init(self, chunk):
        chunk._set_value(self.name, self.calculate(chunk))

    def unpack(self, stream, chunk):
        expected = super().unpack(stream, chunk)
        actual = self.calculate(chunk)

        if actual != expected:
            self.logger.debug(f'CRC stored 0x{expected:08x} but calculated 0x{actual:08x}')
            raise ChecksumException(expected, actual)

        return actual
