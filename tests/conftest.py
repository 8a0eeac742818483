import struct
import zlib

import pytest


PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


def _make_chunk(chunk_type, data):
    '''Encode a chunk by hand, without using the library.'''
    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', zlib.crc32(chunk_type + data))


@pytest.fixture
def make_chunk():
    return _make_chunk


@pytest.fixture
def png_bytes():
    '''A 1x1 grayscale image.'''
    ihdr = struct.pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0)

    return (
        PNG_MAGIC
        + _make_chunk(b'IHDR', ihdr)
        + _make_chunk(b'IDAT', zlib.compress(b'\x00\x00'))
        + _make_chunk(b'IEND', b'')
    )


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / 'image.png'
    path.write_bytes(png_bytes)

    return path
