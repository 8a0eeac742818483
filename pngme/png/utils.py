import logging

from pngme.exceptions import NotFoundException


logger = logging.getLogger(__name__)


def get_chunks_by_type(chunks, name):
    '''All the chunks with the given type, in order.'''
    return [_ for _ in chunks if str(_.type) == name]


def get_chunk_by_name(chunks, name):
    chunks = get_chunks_by_type(chunks, name)

    if len(chunks) == 0:
        raise NotFoundException(f'no chunk with name {name}')

    if len(chunks) > 1:
        logger.debug(f'found {len(chunks)} chunks with name {name}, using the first one')

    return chunks[0]
