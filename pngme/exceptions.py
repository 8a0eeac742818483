from .enum import ErrorKind


class PngmeException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    Other than the message it takes an optional argument that represents the
    chain of the layers that caused the exception: each layer the exception
    goes through while unpacking appends its own name (or index, for arrays),
    so the innermost element comes first.
    '''
    kind = None

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(str(_) for _ in reversed(self.chain))

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.path})'


class UnpackException(PngmeException):
    pass


class TruncatedException(UnpackException):
    kind = ErrorKind.TRUNCATED


class MagicException(UnpackException):
    kind = ErrorKind.BAD_HEADER


class ChecksumException(UnpackException):
    kind = ErrorKind.CHECKSUM_MISMATCH

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(f'CRC mismatch: stored 0x{expected:08x}, computed 0x{actual:08x}', chain=chain)


class ChunkTypeException(PngmeException):
    pass


class InvalidCharactersException(ChunkTypeException, UnpackException):
    kind = ErrorKind.INVALID_CHARACTERS


class WrongLengthException(ChunkTypeException):
    kind = ErrorKind.WRONG_LENGTH


class NotFoundException(PngmeException):
    kind = ErrorKind.NOT_FOUND


class NotUtf8Exception(PngmeException):
    kind = ErrorKind.NOT_UTF8
