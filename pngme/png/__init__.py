'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The PNG format is documented at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

Here we care only about the structure of the file, i.e. the signature followed
by the sequence of chunks: nothing of the image data is interpreted, so it's
possible to add, remove or read chunks (for example to hide a message inside an
image) without touching the rest.
'''
import itertools
from functools import total_ordering

from bitstring import Bits

from pngme.core import Chunk
from pngme import fields
from pngme.common.crc import CRCField
from pngme.enum import Compliant
from pngme.meta import Endianess
from pngme.properties import Dependency
from pngme.streams import Stream
from pngme.exceptions import (
    ChunkTypeException,
    InvalidCharactersException,
    NotFoundException,
    NotUtf8Exception,
    TruncatedException,
    WrongLengthException,
)


CHUNK_TYPE_LENGTH = 4
CHUNK_TYPE_ALLOWED_BYTES = frozenset(itertools.chain(range(65, 91), range(97, 123)))
# bit 5 of each byte of the type (the one that makes a letter lowercase)
CHUNK_TYPE_PROPERTY_BIT = 2


def _in_memory(data):
    '''Parsing works only on data already in memory, files go through from_file().'''
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f'expected a bytes-like object, not {data.__class__.__name__}')

    return Stream(data)


@total_ordering
class ChunkType(object):
    '''The 4 bytes identifying a chunk. Each of them must be an ASCII letter and
    the case of each letter (i.e. its bit 5) is a property of the chunk

     1. ancillary bit: uppercase means critical
     2. private bit: uppercase means public
     3. reserved bit: must be uppercase
     4. safe-to-copy bit: lowercase means safe to copy

    Note that a type with the reserved bit set is constructible, it's only not valid.
    '''
    __slots__ = ('_code',)

    def __init__(self, code):
        if isinstance(code, str):
            code = self._encode(code)

        code = bytes(code)

        if len(code) != CHUNK_TYPE_LENGTH:
            raise WrongLengthException(f'chunk type must be {CHUNK_TYPE_LENGTH} bytes long, not {len(code)}')

        if not CHUNK_TYPE_ALLOWED_BYTES.issuperset(code):
            raise InvalidCharactersException(f'chunk type {code!r} must contain only ASCII letters')

        object.__setattr__(self, '_code', code)

    @staticmethod
    def _encode(text):
        if len(text) != CHUNK_TYPE_LENGTH:
            raise WrongLengthException(f'chunk type must be {CHUNK_TYPE_LENGTH} characters long, not {len(text)}')
        try:
            return text.encode('ascii')
        except UnicodeEncodeError as e:
            raise InvalidCharactersException(f'chunk type {text!r} must contain only ASCII letters') from e

    @classmethod
    def from_bytes(cls, code):
        return cls(bytes(code))

    @classmethod
    def from_string(cls, text):
        return cls.from_bytes(cls._encode(text))

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, name):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __reduce__(self):
        return self.__class__, (self._code,)

    def bytes(self):
        return self._code

    def __bytes__(self):
        return self._code

    def _property_bit(self, index):
        return Bits(self._code)[index * 8 + CHUNK_TYPE_PROPERTY_BIT]

    def is_critical(self):
        return not self._property_bit(0)

    def is_public(self):
        return not self._property_bit(1)

    def is_reserved_bit_valid(self):
        return not self._property_bit(2)

    def is_safe_to_copy(self):
        return self._property_bit(3)

    def is_valid(self):
        return self.is_reserved_bit_valid() and CHUNK_TYPE_ALLOWED_BYTES.issuperset(self._code)

    def to_display_string(self):
        return self._code.decode('ascii', errors='replace')

    def __str__(self):
        return self.to_display_string()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code == other._code

    def __lt__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code < other._code

    def __hash__(self):
        return hash(self._code)


class ChunkTypeField(fields.Field):
    '''The type of a chunk: it accepts the text or the bytes when building.'''

    def init(self, chunk):
        value = chunk.get_value(self.name) if chunk.has_value(self.name) else None

        if value is None:
            raise TypeError(f"missing value for field '{self.name}'")

        if not isinstance(value, ChunkType):
            chunk._set_value(self.name, ChunkType(value))

    def min_size(self):
        return CHUNK_TYPE_LENGTH

    def size(self, value):
        return CHUNK_TYPE_LENGTH

    def pack(self, value, chunk):
        return value.bytes()

    def unpack(self, stream, chunk):
        return ChunkType.from_bytes(stream.read_exact(CHUNK_TYPE_LENGTH))


class PNGChunk(Chunk):
    '''
    This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Both length and crc are derived: they are calculated from the type and the
    data when building a new chunk, and verified when unpacking it.
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)  # big endian
    type   = ChunkTypeField()
    data   = fields.StringField(Dependency('.length'))
    crc    = CRCField(['type', 'data'], endianess=Endianess.BIG_ENDIAN)  # network byte order

    def __init__(self, chunk_type, data):
        super().__init__(type=chunk_type, data=data)

    @classmethod
    def create(cls, chunk_type, data):
        return cls(chunk_type, data)

    @classmethod
    def parse(cls, data):
        '''Build a chunk from its binary representation; bytes after the crc are ignored.'''
        return cls.unpack(_in_memory(data))

    @classmethod
    def unpack(cls, stream, compliant=Compliant.TRAILING):
        remaining = stream.remaining()
        if remaining < cls.min_size():
            raise TruncatedException(
                f'a chunk needs at least {cls.min_size()} bytes, {remaining} available at offset {stream.tell()}')

        return super().unpack(stream, compliant=compliant)

    @property
    def chunk_type(self):
        return self.type

    @property
    def checksum(self):
        return self.crc

    def data_as_string(self):
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise NotUtf8Exception(f'data of chunk {self.type} is not valid UTF-8: {e.reason}') from e

    data_as_text = data_as_string

    serialize = Chunk.pack

    as_bytes = Chunk.pack

    def __str__(self):
        try:
            data = '"%s"' % self.data_as_string()
        except NotUtf8Exception:
            data = repr(list(self.data))

        return 'Chunk { length: %d, type: %s, data: %s, crc: %d }' % (
            self.length,
            self.type,
            data,
            self.crc,
        )


class PNGFile(Chunk):
    '''The whole file: the signature followed by the chunks, in order.

    The order is preserved by each operation and it's the one used when packing.
    '''
    STANDARD_HEADER = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

    header = fields.StringField(8, default=STANDARD_HEADER, is_magic=True)
    chunks = fields.ArrayField(PNGChunk)

    __hash__ = None

    def __init__(self, chunks=()):
        super().__init__(chunks=chunks)

    @classmethod
    def from_chunks(cls, chunks):
        return cls(chunks)

    @classmethod
    def parse(cls, data, compliant=Compliant.TRAILING):
        '''Build the file from its binary representation. Any error in any chunk
        aborts the whole parsing.

        With compliant=Compliant.NONE a tail too short to be a chunk is ignored.'''
        return cls.unpack(_in_memory(data), compliant=compliant)

    @classmethod
    def from_file(cls, path, compliant=Compliant.TRAILING):
        cls.logger.debug(f'reading PNG from \'{path}\'')
        return cls.unpack(Stream(path), compliant=compliant)

    def __len__(self):
        return len(self._values['chunks'])

    def __iter__(self):
        return iter(self.chunks)

    def append_chunk(self, chunk):
        if not isinstance(chunk, PNGChunk):
            raise TypeError(f'only PNGChunk can be appended, not {chunk.__class__.__name__}')

        self.logger.debug(f'appending chunk {chunk.type} at position {len(self)}')
        self._values['chunks'].append(chunk)

    def remove_first_chunk(self, chunk_type):
        '''Remove the first chunk with the given type and return it.'''
        if not isinstance(chunk_type, ChunkType):
            chunk_type = ChunkType.from_string(chunk_type)

        for idx, chunk in enumerate(self._values['chunks']):
            if chunk.type == chunk_type:
                self.logger.debug(f'removing chunk {chunk_type} at position {idx}')
                return self._values['chunks'].pop(idx)

        raise NotFoundException(f'chunk of type {chunk_type} not found')

    def chunk_by_type(self, chunk_type):
        '''Return the first chunk with the given type, None if there isn't one
        or if the type is not a valid one.'''
        if not isinstance(chunk_type, ChunkType):
            try:
                chunk_type = ChunkType.from_string(chunk_type)
            except ChunkTypeException:
                return None

        for chunk in self.chunks:
            if chunk.type == chunk_type:
                return chunk

        return None

    serialize = Chunk.pack

    as_bytes = Chunk.pack

    def __str__(self):
        msg = 'PNG File:\n'
        msg += '  Header: %s\n' % list(self.header)
        msg += '  Chunks:\n'
        for chunk in self.chunks:
            msg += '    %s\n' % chunk
        return msg
