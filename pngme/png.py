import logging
from collections.abc import Sequence
from struct import pack
from typing import Iterable, Optional
from zlib import crc32 as crc

import requests

from .chunktype import ChunkType
from .pngexceptions import *
from .utils import as_data, ByteReader, Data as _Data


"""
This is the main pngme module, and contains the structures that make up a PNG file.
"""

logger = logging.getLogger(__name__)

# Type aliases for annotations
_Png = "Png"
_Chunk = "PngChunk"

_PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# Length, type and CRC fields
_CHUNK_OVERHEAD = 12

# A chunk's length is limited to 2^31 - 1 by the PNG specification
_MAX_CHUNK_LENGTH = (1 << 31) - 1


class PngChunk:

    """
    Represents a PNG chunk.
    The structure of a png chunk should be as follow:
            [   length (4 bytes, big-endian) |
                type (4 bytes, ascii)        |
                data (length bytes)          |
                crc (4 bytes, big-endian)    ]

    The crc checksum is calculated with the chunk type and data, but does
    not include the length header.
    A chunk cannot be modified once created.
    """

    __slots__ = ('__chunk_type', '__data', '__crc')

    def __init__(self, chunk_type: ChunkType, data: _Data = b'') -> None:
        """
        Creates a chunk holding the given data. The length and CRC are computed from it.
        To read a chunk from its raw bytes, use :meth:`from_bytes`.

        :param chunk_type: the type of the new chunk.
        :param data: the chunk's payload, may be empty.
        :raises TypeError: if one of the arguments is not of the right type.
        :raises ValueError: if data is too long to fit in a chunk.
        """
        if not isinstance(chunk_type, ChunkType):
            raise TypeError("chunk_type should be a ChunkType, not {}".format(type(chunk_type)))
        data = as_data(data)
        if len(data) > _MAX_CHUNK_LENGTH:
            raise ValueError(
                "A chunk can hold at most {} bytes, got {}".format(_MAX_CHUNK_LENGTH, len(data))
            )
        self.__chunk_type = chunk_type
        self.__data = data
        self.__crc = crc(chunk_type.bytes() + data)

    @classmethod
    def from_bytes(cls, chunkbytes: _Data) -> _Chunk:
        """
        Reads a chunk from the beginning of the given bytes.
        Anything following the chunk is ignored.

        :param chunkbytes: the raw bytes of the chunk.
        :raises TypeError: if chunkbytes is not of a valid type.
        :raises InvalidChunkStructureException: if the bytes are too short for the chunk they describe.
        :raises InvalidChunkTypeException: if the chunk type is not made of four ASCII letters.
        :raises InvalidCrcException: if the stored CRC does not match the chunk's content.
        """
        return cls.read(ByteReader(chunkbytes))

    @classmethod
    def read(cls, reader: ByteReader) -> _Chunk:
        """
        Reads a chunk at the reader's position and moves the reader past it.
        Raises the same exceptions as :meth:`from_bytes`.
        """
        start = reader.position
        if reader.remaining < _CHUNK_OVERHEAD:
            raise InvalidChunkStructureException(
                "a chunk is at least {} bytes long, only {} left at offset {}".format(
                    _CHUNK_OVERHEAD, reader.remaining, start
                )
            )
        length = reader.read_u32("chunk length")
        chunk_type = ChunkType(reader.read(4, "chunk type"))
        if length > _MAX_CHUNK_LENGTH:
            raise InvalidChunkStructureException(
                "chunk at offset {} declares {} bytes of data, over the {} bytes limit".format(
                    start, length, _MAX_CHUNK_LENGTH
                )
            )
        # Data and CRC
        if length > reader.remaining - 4:
            raise InvalidChunkStructureException(
                "chunk at offset {} declares {} bytes of data but only {} are left".format(
                    start, length, reader.remaining - 4
                )
            )
        data = reader.read(length, "chunk data")
        stored_crc = reader.read_u32("chunk CRC")
        chunk = cls(chunk_type, data)
        if chunk.crc != stored_crc:
            raise InvalidCrcException(chunk.crc, stored_crc)
        return chunk

    @property
    def length(self) -> int:
        """
        :returns: the length of this chunk's payload.
        """
        return len(self.__data)

    @property
    def chunk_type(self) -> ChunkType:
        return self.__chunk_type

    @property
    def type(self) -> str:
        """
        :returns: the type of this chunk as a string (E.g. IHDR)
        """
        return str(self.__chunk_type)

    @property
    def data(self) -> bytes:
        """
        :returns: this chunk's payload.
        """
        return self.__data

    @property
    def crc(self) -> int:
        """
        :returns: the chunk's CRC checksum.
        """
        return self.__crc

    def compute_crc(self) -> int:
        """
        :returns: the correct CRC checksum for this chunk's type and data.
        """
        return crc(self.__chunk_type.bytes() + self.__data)

    def check_crc(self) -> bool:
        """
        :returns: True if the CRC checksum of this chunk is correct.
        """
        return self.compute_crc() == self.crc

    def data_as_string(self) -> str:
        """
        :returns: this chunk's payload decoded as UTF-8 text.
        :raises ChunkDecodeException: if the payload is not valid UTF-8.
        """
        try:
            return self.__data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ChunkDecodeException(
                "{} chunk does not hold UTF-8 text: {}".format(self.type, e)
            ) from e

    def as_bytes(self) -> bytes:
        """
        :returns: this chunk's raw content, as found in a file.
        """
        return pack('>I', self.length) + self.__chunk_type.bytes() + self.__data + pack('>I', self.__crc)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __len__(self) -> int:
        """
        :returns: the length of this chunk.
        """
        return self.length

    def __eq__(self, other) -> bool:
        if not isinstance(other, PngChunk):
            return NotImplemented
        return (self.length, self.chunk_type, self.data, self.crc) == \
            (other.length, other.chunk_type, other.data, other.crc)

    def __hash__(self) -> int:
        return hash((self.__chunk_type, self.__data))

    def __str__(self) -> str:
        return "Chunk (length: {}, chunk_type: {}, data: {!r}, crc: {})".format(
            self.length, self.type, self.__data, self.__crc
        )

    def __repr__(self) -> str:
        return "<PngChunk [{}] length={} crc={:#010x}>".format(self.type, self.length, self.__crc)


class ChunksView(Sequence):

    """
    A read only view over the chunks of a :class:`Png`.
    It follows the image: chunks appended or removed after the view was created show up when iterating it again.
    """

    def __init__(self, chunks: list) -> None:
        self.__chunks = chunks

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self.__chunks[index])
        return self.__chunks[index]

    def __len__(self) -> int:
        return len(self.__chunks)

    def __repr__(self) -> str:
        return "ChunksView({!r})".format(self.__chunks)


class Png:

    """
    Represents a PNG file according to the PNG specification: https://www.w3.org/TR/PNG/.
    A PNG file starts with the PNG signature.
    It then contains a stream of PNG chunks, each starting with a four bytes length,
    followed by a four bytes ascii type and then by a payload of the specified length, followed by a CRC checksum.

    Chunks are kept in the order they were read or appended in.
    Nothing here checks that the chunks make a displayable image:
    several chunks may share a type, and chunks are only read as opaque payloads.
    """

    def __init__(self, chunks: Iterable[_Chunk] = ()) -> None:
        """
        Constructs a :class:`Png` object holding the given chunks.
        To read a PNG from its bytes, use :meth:`from_bytes`.
        To directly read a PNG file from disc or http, prefer the :func:`open` function.

        :param chunks: chunks to put in the image, in order.
        :raises TypeError: if one of the chunks is not a :class:`PngChunk`.
        """
        self.__chunks = []
        for chunk in chunks:
            self.append_chunk(chunk)

    @classmethod
    def from_bytes(cls, filebytes: _Data) -> _Png:
        """
        Parses a whole PNG file.

        :param filebytes: the bytes that make up the PNG.
        :raises TypeError: if filebytes is not of the right type.
        :raises InvalidPngStructureException: if the PNG signature is missing
            or if the chunks are malformed (see :meth:`PngChunk.from_bytes`).
        :raises InvalidChunkTypeException: if a chunk has an invalid type.
        """
        filebytes = as_data(filebytes)
        if not read_png_signature(filebytes):
            raise InvalidPngStructureException("missing PNG signature")
        reader = ByteReader(filebytes, len(_PNG_SIGNATURE))
        png = cls()
        while not reader.at_end():
            png.__chunks.append(PngChunk.read(reader))
        logger.debug("Read %d chunks from %d bytes", len(png.__chunks), len(filebytes))
        return png

    @property
    def signature(self) -> bytes:
        return _PNG_SIGNATURE

    @property
    def chunks(self) -> ChunksView:
        """
        :returns: the PNG chunks that make up this image, as a read only view.
        """
        return ChunksView(self.__chunks)

    def append_chunk(self, chunk: _Chunk) -> None:
        """
        Adds the chunk at the end of the file.

        :param chunk: the chunk to add to the image.
        :raises TypeError: if chunk is not a :class:`PngChunk`.
        """
        if not isinstance(chunk, PngChunk):
            raise TypeError("Expected a PngChunk, not {}".format(type(chunk)))
        self.__chunks.append(chunk)
        logger.debug("Appended %r", chunk)

    def chunk_by_type(self, name: str) -> Optional[_Chunk]:
        """
        :param name: the chunk type to look for (e.g. IHDR).
        :returns: the first chunk of the given type in this image, or None if there is none.
        """
        for chunk in self.__chunks:
            if chunk.type == name:
                return chunk
        return None

    def get_chunks_by_type(self, name: str) -> tuple[_Chunk]:
        """
        :param name: the chunk type to look for (e.g. IHDR).
        :returns: all the chunks of the given type in this image.
        """
        return tuple(filter(lambda c: c.type == name, self.__chunks))

    def remove_chunk(self, name: str) -> _Chunk:
        """
        Removes the first chunk of the given type from the image.

        :param name: the chunk type to remove (e.g. tEXt).
        :returns: the removed chunk.
        :raises ChunkNotFoundException: if this image has no chunk of that type. The image is left unchanged.
        """
        for index, chunk in enumerate(self.__chunks):
            if chunk.type == name:
                del self.__chunks[index]
                logger.debug("Removed %r at index %d", chunk, index)
                return chunk
        raise ChunkNotFoundException(name)

    def index_of_chunk(self, chunk: _Chunk) -> int:
        """
        :param chunk: a chunk to get the index of.
        :returns: the index of the given chunk in the image.
        :raises ValueError: if this image does not contain the given chunk.
        """
        return self.__chunks.index(chunk)

    def as_bytes(self) -> bytes:
        """
        :returns: the raw bytes that make up the PNG file.
        """
        b = bytearray(_PNG_SIGNATURE)
        for chunk in self.__chunks:
            b += chunk.as_bytes()
        return bytes(b)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def copy(self) -> _Png:
        """
        :returns: a new Png object with the same chunks as this one.
        """
        return Png(self.__chunks)

    def save(self, file_name: str) -> None:
        """
        Save this PNG to a file on disc.
        :param file_name: name to save the file as. Will be overwritten if is already exists.
        """
        with _builtin_open(file_name, 'wb') as f:  # Workaround because we have our own open function
            f.write(self.as_bytes())

    def __len__(self) -> int:
        return len(self.__chunks)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self.signature == other.signature and list(self.chunks) == list(other.chunks)

    __hash__ = None

    def __repr__(self) -> str:
        return "<Png [{}]>".format(', '.join(c.type for c in self.__chunks))


_builtin_open = open


def open(filename: str) -> Png:
    """
    :returns: a Png object, reading from the given file name. Http and Https links are supported as well.
    :raises requests.HTTPError: if the server answered with an error status.
    """
    if is_url(filename):
        logger.debug("Downloading %s", filename)
        response = requests.get(filename)
        response.raise_for_status()
        data = response.content
    else:
        with _builtin_open(filename, 'rb') as f:
            data = f.read()
    return Png.from_bytes(data)


def is_url(filename: str) -> bool:
    return filename.startswith('http://') or filename.startswith('https://')


def read_png_signature(data: _Data) -> bool:
    return data[0:8] == _PNG_SIGNATURE
