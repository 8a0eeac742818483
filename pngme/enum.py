from enum import Enum, Flag, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE     = 0
    TRAILING = 1 << 0  # every byte after the header must belong to a chunk


class ErrorKind(Enum):
    '''Closed list of the failures the codec can report.'''
    INVALID_CHARACTERS = auto()
    WRONG_LENGTH       = auto()
    TRUNCATED          = auto()
    BAD_HEADER         = auto()
    CHECKSUM_MISMATCH  = auto()
    NOT_FOUND          = auto()
    NOT_UTF8           = auto()
