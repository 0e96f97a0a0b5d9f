from struct import unpack
from typing import Union, get_args

from .pngexceptions import InvalidChunkStructureException

Data = Union[bytes, bytearray]


def as_data(data: Data):
    if not isinstance(data, get_args(Data)):
        types = " or ".join(t.__name__ for t in get_args(Data))
        raise TypeError("Expected {}, not {}".format(types, type(data)))
    if not isinstance(data, bytes):
        data = bytes(data)
    return data


class ByteReader:

    """
    A read cursor over a byte buffer.
    Every read is checked against the remaining length before anything is sliced,
    so a truncated buffer results in an :class:`InvalidChunkStructureException`
    instead of silently short data.
    """

    def __init__(self, data: Data, position: int = 0) -> None:
        self.__data = as_data(data)
        if not 0 <= position <= len(self.__data):
            raise ValueError("position {} is out of the buffer".format(position))
        self.__position = position

    @property
    def position(self) -> int:
        """
        :returns: the offset of the next byte to be read.
        """
        return self.__position

    @property
    def remaining(self) -> int:
        """
        :returns: the number of bytes left to read.
        """
        return len(self.__data) - self.__position

    def at_end(self) -> bool:
        return self.remaining == 0

    def read(self, size: int, what: str = "data") -> bytes:
        """
        Reads exactly size bytes and advances the cursor.

        :param size: the number of bytes to read.
        :param what: a name for the field being read, used in error messages.
        :raises InvalidChunkStructureException: if fewer than size bytes remain.
        """
        if size < 0:
            raise ValueError("Cannot read a negative number of bytes")
        if size > self.remaining:
            raise InvalidChunkStructureException(
                "truncated {} at offset {}: needed {} bytes, {} left".format(
                    what, self.__position, size, self.remaining
                )
            )
        start = self.__position
        self.__position += size
        return self.__data[start:self.__position]

    def read_u32(self, what: str = "integer") -> int:
        """
        Reads a big-endian unsigned 32 bits integer.
        """
        return unpack('>I', self.read(4, what))[0]
