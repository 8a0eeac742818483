"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable: it doesn't hold any value by itself, the Chunk using it
stores the values and asks the field to encode/decode them.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import PngmeException, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, default=None, endianess=Endianess.LITTLE_ENDIAN):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.default = default
        self.endianess = endianess

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def init(self, chunk):
        '''Called while building a new chunk, after the values passed by the
        user are stored: here the field can fill in its default or derive its value.'''
        if chunk.has_value(self.name) or self.default is None:
            return

        chunk._set_value(self.name, self.value_from_default())

    def value_from_default(self):
        return self.default

    def view(self, value):
        '''What the user sees accessing the field from a chunk instance.'''
        return value

    def repr_value(self, value):
        return repr(value)

    def min_size(self) -> int:
        '''Minimum number of bytes needed to unpack this field.'''
        return 0

    def size(self, value) -> int:
        return len(self.pack(value, None))

    def pack(self, value, chunk) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}.pack() not implemented")

    def unpack(self, stream, chunk):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, **kw):
        self.format = format
        super().__init__(**kw)

    def get_format(self):
        return '%s%s' % ({
            Endianess.LITTLE_ENDIAN: '<',
            Endianess.BIG_ENDIAN: '>',
        }[self.endianess], self.format)

    def repr_value(self, value):
        return hex(value)

    def init(self, chunk):
        super().init(chunk)

        if chunk.has_value(self.name):
            # fail now rather than when packing
            self.pack(chunk.get_value(self.name), chunk)

    def min_size(self):
        return struct.calcsize(self.get_format())

    def size(self, value):
        return struct.calcsize(self.get_format())

    def pack(self, value, chunk):
        try:
            return struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueError(f"value {value!r} doesn't fit field '{self.name}' ({self.get_format()}): {e}") from e

    def unpack(self, stream, chunk):
        raw = stream.read_exact(self.min_size())

        return struct.unpack(self.get_format(), raw)[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length is an integer or a Dependency from another field of the same chunk.
    With is_magic=True the content must be equal to the default and anything
    else (even a short read) raises MagicException."""

    def __init__(self, n=None, is_magic=False, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])
        self.is_magic = is_magic

        super().__init__(**kw)

    def get_length(self, chunk):
        if isinstance(self.length, Dependency):
            return self.length.resolve(chunk)

        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if self.default is None else self.default

    def init(self, chunk):
        if not chunk.has_value(self.name):
            if isinstance(self.length, Dependency) and self.default is None:
                raise TypeError(f"missing value for field '{self.name}'")
            chunk._set_value(self.name, self.value_from_default())

        value = bytes(chunk.get_value(self.name))
        chunk._set_value(self.name, value)

        length = len(value)
        if isinstance(self.length, Dependency):
            self.length.resolve_and_set(chunk, length)
        elif length != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

    def min_size(self):
        return 0 if isinstance(self.length, Dependency) else self.length

    def size(self, value):
        return len(value)

    def pack(self, value, chunk):
        return bytes(value)

    def unpack(self, stream, chunk):
        length = self.get_length(chunk)

        if not self.is_magic:
            return stream.read_exact(length)

        raw = stream.read(length)

        if raw != self.default:
            self.logger.warning(f'the magic doesn\'t correspond: {raw!r}')
            raise MagicException(f'expected magic {self.default!r}, found {raw!r}')

        return raw


class ArrayField(Field):
    '''Un/Pack an array of Chunks, all of the same class.

    While unpacking it takes elements until the stream is exhausted; if the
    chunk is not compliant with Compliant.TRAILING a tail too small to contain
    an element is logged and skipped instead of failing.
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls
        super().__init__(**kw)

    def init(self, chunk):
        elements = list(chunk.get_value(self.name)) if chunk.has_value(self.name) else []

        for element in elements:
            if not isinstance(element, self.field_cls):
                raise TypeError(f"'{self.name}' accepts only {self.field_cls.__name__}, not {element.__class__.__name__}")

        chunk._set_value(self.name, elements)

    def view(self, value):
        return tuple(value)

    def size(self, value):
        return sum(element.size for element in value)

    def pack(self, value, chunk):
        return b''.join(element.pack() for element in value)

    def unpack(self, stream, chunk):
        elements = []
        min_size = self.field_cls.min_size()

        while not stream.at_end():
            if stream.remaining() < min_size and not chunk.compliant & Compliant.TRAILING:
                self.logger.warning(f'ignoring {stream.remaining()} trailing bytes at offset {stream.tell()}')
                break

            self.logger.debug(f'unpacking {self.field_cls.__name__} #{len(elements)} at offset {stream.tell()}')

            try:
                element = self.field_cls.unpack(stream, compliant=chunk.compliant)
            except PngmeException as e:
                e.chain.append(len(elements))
                raise

            elements.append(element)

        return elements
