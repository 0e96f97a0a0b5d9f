class PngmeException(Exception):
    """Base class for every error raised by pngme."""
    pass


class InvalidChunkTypeException(PngmeException, ValueError):
    """Raised when bytes or a string do not make up a valid 4 letters chunk type."""
    def __init__(self, txt):
        super(InvalidChunkTypeException, self).__init__(txt)


class InvalidPngStructureException(PngmeException, ValueError):
    """Raised when a png structure is invalid."""
    def __init__(self, txt):
        super(InvalidPngStructureException, self).__init__(txt)


class InvalidChunkStructureException(InvalidPngStructureException):
    """Raised when a chunk's internal structure is invalid."""
    def __init__(self, txt):
        super(InvalidChunkStructureException, self).__init__(txt)


class InvalidCrcException(InvalidChunkStructureException):
    """Raised when the CRC stored in a chunk does not match its content."""
    def __init__(self, expected, found):
        self.expected = expected
        self.found = found
        super(InvalidCrcException, self).__init__(
            "invalid CRC: expected {:#010x}, found {:#010x}".format(expected, found)
        )


class ChunkDecodeException(PngmeException, ValueError):
    """Raised when a chunk's payload cannot be decoded as text."""
    def __init__(self, txt):
        super(ChunkDecodeException, self).__init__(txt)


class ChunkNotFoundException(PngmeException, KeyError):
    """Raised when no chunk of the requested type is in the image."""
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super(ChunkNotFoundException, self).__init__(
            "no chunk of type {!r} in the image".format(chunk_type)
        )

    def __str__(self):
        # KeyError would quote the message again
        return self.args[0]
