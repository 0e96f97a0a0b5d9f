from .pngexceptions import InvalidChunkTypeException
from .utils import as_data, Data as _Data


"""
Chunk types are four ASCII letters. The case of each letter is a flag:

    byte 1: uppercase for critical chunks, lowercase for ancillary ones
    byte 2: uppercase for public chunks, lowercase for private ones
    byte 3: reserved, has to be uppercase
    byte 4: lowercase if the chunk is safe to copy by editors that do not know it

See https://www.w3.org/TR/PNG/#5Chunk-naming-conventions
"""

_CHUNK_TYPE_LENGTH = 4


def _is_alpha(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def _is_upper(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A


class ChunkType:

    """
    The four bytes tag identifying what a chunk holds (E.g. IHDR, tEXt, RuSt).
    Any four ASCII letters make a chunk type,
    but only those with an uppercase third letter are valid according to the PNG specification.
    """

    __slots__ = ('__bytes',)

    def __init__(self, raw: _Data) -> None:
        """
        :param raw: exactly four ASCII letters.
        :raises TypeError: if raw is not bytes or a bytearray.
        :raises InvalidChunkTypeException: if raw is not made of exactly four ASCII letters.
        """
        raw = as_data(raw)
        if len(raw) != _CHUNK_TYPE_LENGTH:
            raise InvalidChunkTypeException(
                "a chunk type is {} bytes long, got {}".format(_CHUNK_TYPE_LENGTH, len(raw))
            )
        if not all(_is_alpha(b) for b in raw):
            raise InvalidChunkTypeException(
                "a chunk type can only contain ASCII letters, got {!r}".format(raw)
            )
        self.__bytes = raw

    @classmethod
    def from_str(cls, name: str) -> "ChunkType":
        """
        :param name: a four characters chunk type name (E.g. 'RuSt').
        :raises TypeError: if name is not a str.
        :raises InvalidChunkTypeException: if name is not made of exactly four ASCII letters.
        """
        if not isinstance(name, str):
            raise TypeError("A chunk's type should be a string.")
        if len(name) != _CHUNK_TYPE_LENGTH or not name.isascii():
            raise InvalidChunkTypeException(
                "a chunk type is made of {} ASCII letters, got {!r}".format(_CHUNK_TYPE_LENGTH, name)
            )
        return cls(name.encode('ascii'))

    def bytes(self) -> bytes:
        """
        :returns: the four bytes of this chunk type.
        """
        return self.__bytes

    def is_valid(self) -> bool:
        """
        :returns: True if all four bytes are letters and the reserved bit is valid.
        """
        return all(_is_alpha(b) for b in self.__bytes) and self.is_reserved_bit_valid()

    def is_critical(self) -> bool:
        """
        :returns: whether the ancillary bit is not set (first letter uppercase).
            A decoder coming across an unknown critical chunk should fail.
        """
        return _is_upper(self.__bytes[0])

    def is_ancillary(self) -> bool:
        return not self.is_critical()

    def is_public(self) -> bool:
        """
        :returns: whether the private bit is not set (second letter uppercase).
        """
        return _is_upper(self.__bytes[1])

    def is_private(self) -> bool:
        return not self.is_public()

    def is_reserved_bit_valid(self) -> bool:
        """
        :returns: whether the reserved bit is not set (third letter uppercase).
        """
        return _is_upper(self.__bytes[2])

    def is_safe_to_copy(self) -> bool:
        """
        :returns: whether the safe to copy bit is set (fourth letter lowercase).
        """
        return not _is_upper(self.__bytes[3])

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self.__bytes == other.bytes()

    def __hash__(self) -> int:
        return hash(self.__bytes)

    def __str__(self) -> str:
        return self.__bytes.decode('ascii')

    def __repr__(self) -> str:
        return "ChunkType({!r})".format(self.__bytes)
