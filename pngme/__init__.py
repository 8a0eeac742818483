"""
# pngme: PNG chunks for humans.

A PNG file is a fixed signature followed by a sequence of chunks, each one made
of a length, a type, the data and a CRC over type and data. This library
describes this structure declaratively and allows to manipulate it without
touching (or even understanding) the image itself.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that. Every chunk is validated
    while reading: a wrong type, a truncated chunk or a CRC mismatch aborts
    the whole operation.

 2. pack(): encode the high-level representation into binary data.

In the middle the file can be changed, appending or removing chunks: the
derived values (length and CRC) are always calculated by the library and
cannot be set by the user.

    >>> from pngme.png import PNGFile, PNGChunk
    >>> png = PNGFile.parse(data)
    >>> png.append_chunk(PNGChunk('ruSt', b'hidden message'))
    >>> png.chunk_by_type('ruSt').data_as_string()
    'hidden message'
    >>> data = png.pack()

"""
