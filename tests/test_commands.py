import pytest

from pngme.commands import main, write_png
from pngme.png import PNGFile, PNGChunk


def run(*args):
    return main(['pngchunks.py'] + [str(_) for _ in args])


def test_encode_decode(png_path, capsys):
    assert run('encode', png_path, 'ruSt', 'this is a secret') == 0
    assert capsys.readouterr().out == 'Message encoded successfully.\n'

    png = PNGFile.from_file(png_path)

    assert png.chunks[-1] == PNGChunk('ruSt', b'this is a secret')

    assert run('decode', png_path, 'ruSt') == 0
    assert capsys.readouterr().out == 'Decoded message: this is a secret\n'


def test_encode_output(tmp_path, png_path, png_bytes, capsys):
    output = tmp_path / 'output.png'

    assert run('encode', png_path, 'ruSt', 'hello', '-o', output) == 0

    assert png_path.read_bytes() == png_bytes
    assert PNGFile.from_file(output).chunk_by_type('ruSt').data == b'hello'

    assert run('encode', png_path, 'ruSt', 'world', '--output', output) == 0
    assert PNGFile.from_file(output).chunk_by_type('ruSt').data == b'world'


def test_decode_not_found(png_path, capsys):
    assert run('decode', png_path, 'ruSt') == 0
    assert capsys.readouterr().out == 'Chunk of type ruSt not found.\n'


def test_decode_not_utf8(tmp_path, capsys):
    path = tmp_path / 'binary.png'
    path.write_bytes(PNGFile.from_chunks([PNGChunk('ruSt', b'\xff\xfe')]).pack())

    assert run('decode', path, 'ruSt') == 0
    assert capsys.readouterr().out == 'Failed to decode message as valid UTF-8.\n'


def test_remove(png_path, png_bytes, capsys):
    run('encode', png_path, 'ruSt', 'secret')
    capsys.readouterr()

    assert run('remove', png_path, 'ruSt') == 0
    assert capsys.readouterr().out == 'Chunk of type ruSt removed successfully.\n'
    assert png_path.read_bytes() == png_bytes


def test_remove_not_found(png_path, png_bytes, capsys):
    assert run('remove', png_path, 'ruSt') == 1
    assert capsys.readouterr().out == 'Chunk of type ruSt not found.\n'
    assert png_path.read_bytes() == png_bytes


def test_print(png_path, capsys):
    assert run('print', png_path) == 0

    lines = capsys.readouterr().out.splitlines()

    assert len(lines) == 3
    assert lines[0].startswith('Chunk { length: 13, type: IHDR, data: ')
    assert lines[2].startswith('Chunk { length: 0, type: IEND, data: "", crc: ')


@pytest.mark.parametrize('args', [
    [],
    ['kebab'],
    ['print'],
    ['decode', 'image.png'],
    ['encode', 'image.png', 'ruSt'],
    ['encode', 'image.png', 'ruSt', 'message', '-o'],
])
def test_usage(args, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run(*args)

    assert excinfo.value.code == 1
    assert capsys.readouterr().out.startswith('usage: pngchunks.py')


def test_errors(tmp_path, png_path, capsys):
    assert run('print', tmp_path / 'missing.png') == 1
    assert capsys.readouterr().err.startswith('error: ')

    assert run('encode', png_path, 'ru5t', 'message') == 1
    assert 'ASCII letters' in capsys.readouterr().err

    corrupted = tmp_path / 'corrupted.png'
    corrupted.write_bytes(b'GIF89a')

    assert run('print', corrupted) == 1
    assert 'magic' in capsys.readouterr().err


def test_write_png_keeps_file_if_packing_fails(png_path, png_bytes, monkeypatch):
    png = PNGFile.from_file(png_path)

    def broken_pack(self):
        raise ValueError('cannot pack')

    monkeypatch.setattr(PNGFile, 'pack', broken_pack)

    with pytest.raises(ValueError):
        write_png(png_path, png)

    assert png_path.read_bytes() == png_bytes


def test_remove_wrong_type(png_path, png_bytes, capsys):
    assert run('remove', png_path, 'ru5t') == 1
    assert capsys.readouterr().err.startswith('error: ')
    assert png_path.read_bytes() == png_bytes
