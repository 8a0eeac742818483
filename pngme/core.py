"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List

from .enum import Compliant
from .fields import Field
from .meta import MetaChunk
from .exceptions import PngmeException


class Chunk(metaclass=MetaChunk):
    """
    Main class that defines a format: the fields declared in the class body,
    in order, describe the binary layout.

        class TLV(Chunk):
            type   = fields.StructField('I')
            length = fields.StructField('I')
            data   = fields.StringField(Dependency('.length'))

    An instance is built in one of two ways

     1. calling the class with a value for the fields that are not derived
        (TLV(type=1, data=b'AAAA') sets length by itself)
     2. unpack()-ing it from a Stream

    and after that its values can only be read: the fields are exposed as
    read-only attributes.
    """

    def __init__(self, **kwargs):
        unknown = [_ for _ in kwargs if _ not in self.get_ordered_fields_name()]
        if unknown:
            raise TypeError(f"{self.__class__.__name__} has no field(s) named {', '.join(unknown)}")

        self.compliant = Compliant.TRAILING
        self._values = dict(kwargs)

        for field_name, field in self.get_fields():
            self.logger.debug('initializing %s.%s' % (self.__class__.__name__, field_name))
            field.init(self)

        missing = [_ for _ in self.get_ordered_fields_name() if not self.has_value(_)]
        if missing:
            raise TypeError(f"{self.__class__.__name__} missing value for field(s) {', '.join(missing)}")

    @classmethod
    def get_ordered_fields_name(cls) -> List[str]:
        return cls._meta.fields

    @classmethod
    def get_fields(cls) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, field) for each field.'''
        return [(_, getattr(cls, _)) for _ in cls.get_ordered_fields_name()]

    @classmethod
    def get_field(cls, name) -> Field:
        if name not in cls._meta.fields:
            raise KeyError(f"{cls.__name__} has no field named '{name}'")

        return getattr(cls, name)

    @classmethod
    def min_size(cls) -> int:
        '''The minimum number of bytes an instance of this class can occupy.'''
        return sum(field.min_size() for _, field in cls.get_fields())

    def has_value(self, name) -> bool:
        return name in self._values

    def get_value(self, name):
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"field '{name}' of {self.__class__.__name__} has no value yet") from None

    def _set_value(self, name, value):
        self._values[name] = value

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented

        return type(self) is type(other) and self._values == other._values

    def __hash__(self):
        return hash((self.__class__, tuple(self._values[_] for _ in self.get_ordered_fields_name())))

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, field.repr_value(self._values[field_name])))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, field.repr_value(self._values[field_name]))
        return msg

    @property
    def size(self):
        '''the size MUST not be set but MUST be derived from the fields'''
        size = 0
        for field_name, field in self.get_fields():
            size += field.size(self._values[field_name])

        return size

    def pack(self) -> bytes:
        '''Encode the values into their binary representation, field after field.'''
        value = b''
        for field_name, field in self.get_fields():
            field_raw = field.pack(self._values[field_name], self)
            self.logger.debug("packing %s.%s raw=%s" % (self.__class__.__name__, field_name, field_raw[:16]))
            value += field_raw

        return value

    @property
    def raw(self):
        return self.pack()

    @classmethod
    def unpack(cls, stream, compliant=Compliant.TRAILING):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read in order starting from the actual offset of the stream,
        each one can depend on the values of the preceding ones. Any error aborts
        the unpacking and the name of the field is appended to the exception's chain.
        '''
        instance = cls.__new__(cls)
        instance.compliant = compliant
        instance._values = {}

        for field_name, field in cls.get_fields():
            cls.logger.debug('unpacking %s.%s at offset %d' % (cls.__name__, field_name, stream.tell()))

            try:
                value = field.unpack(stream, instance)
            except PngmeException as e:
                e.chain.append(field_name)
                raise

            instance._values[field_name] = value

        return instance
