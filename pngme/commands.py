'''
Command line front end: hide messages inside a PNG file as chunks.

    $ pngchunks.py encode image.png ruSt 'this is a secret'
    $ pngchunks.py decode image.png ruSt
    $ pngchunks.py remove image.png ruSt
    $ pngchunks.py print image.png
'''
import sys
import logging

from pngme.png import PNGFile, PNGChunk
from pngme.exceptions import PngmeException, NotFoundException, NotUtf8Exception


logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <command> [arguments]

commands:
  encode <file> <chunk type> <message> [-o|--output <output file>]
  decode <file> <chunk type>
  remove <file> <chunk type>
  print  <file>''')
    sys.exit(1)


def write_png(path, png):
    data = png.pack()

    logger.debug(f'writing {len(png)} chunks to \'{path}\'')
    with open(path, 'wb') as f:
        f.write(data)


def encode(path, chunk_type, message, output=None):
    png = PNGFile.from_file(path)
    png.append_chunk(PNGChunk(chunk_type, message.encode('utf-8')))

    write_png(output or path, png)
    print('Message encoded successfully.')

    return 0


def decode(path, chunk_type):
    png = PNGFile.from_file(path)
    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        print(f'Chunk of type {chunk_type} not found.')
        return 0

    try:
        print(f'Decoded message: {chunk.data_as_string()}')
    except NotUtf8Exception:
        print('Failed to decode message as valid UTF-8.')

    return 0


def remove(path, chunk_type):
    png = PNGFile.from_file(path)

    try:
        png.remove_first_chunk(chunk_type)
    except NotFoundException:
        print(f'Chunk of type {chunk_type} not found.')
        return 1

    write_png(path, png)
    print(f'Chunk of type {chunk_type} removed successfully.')

    return 0


def print_chunks(path):
    png = PNGFile.from_file(path)

    for chunk in png.chunks:
        print(chunk)

    return 0


def _pop_output(args):
    '''Remove the output option from the arguments and return its value.'''
    for option in ('-o', '--output'):
        if option not in args:
            continue

        idx = args.index(option)
        if idx + 1 >= len(args):
            return None, False

        output = args[idx + 1]
        del args[idx:idx + 2]

        return output, True

    return None, True


# command -> (function, number of positional arguments)
COMMANDS = {
    'encode': (encode, 3),
    'decode': (decode, 2),
    'remove': (remove, 2),
    'print':  (print_chunks, 1),
}


def main(argv):
    progname = argv[0] if argv else 'pngme'

    if len(argv) < 2 or argv[1] not in COMMANDS:
        usage(progname)

    command = argv[1]
    args = list(argv[2:])
    func, n_args = COMMANDS[command]

    kwargs = {}
    if command == 'encode':
        output, ok = _pop_output(args)
        if not ok:
            usage(progname)
        kwargs['output'] = output

    if len(args) != n_args:
        usage(progname)

    logger.debug(f'running {command} with {args} {kwargs}')

    try:
        return func(*args, **kwargs)
    except (PngmeException, OSError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
