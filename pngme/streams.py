import io
import os
import logging

from .exceptions import TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file path to
    uniform its properties: mainly we need reads that never
    return less than asked for, raising TruncatedException instead.

    The data is always loaded in memory, so the size is known upfront.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream from' % self._type.__name__)

        init_method()

        self.size = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(0)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}, size={self.size}, offset={self.tell()})>'

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = io.BytesIO(f.read())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def tell(self):
        return self.obj.tell()

    def remaining(self):
        return self.size - self.tell()

    def at_end(self):
        return self.remaining() <= 0

    def read(self, n):
        return self.obj.read(n)

    def read_exact(self, n):
        offset = self.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise TruncatedException(f'expected {n} bytes at offset {offset}, only {len(data)} available')

        return data
