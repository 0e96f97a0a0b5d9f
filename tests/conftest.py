import struct
import zlib

import pytest


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def raw_chunk(chunk_type, data, crc=None):
    """Builds a chunk record by hand, without going through pngme."""
    if crc is None:
        crc = zlib.crc32(chunk_type + data)
    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', crc)


@pytest.fixture
def ihdr_data():
    # 1x1, 8 bits greyscale
    return struct.pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0)


@pytest.fixture
def png_bytes(ihdr_data):
    return (
        PNG_SIGNATURE
        + raw_chunk(b'IHDR', ihdr_data)
        + raw_chunk(b'IDAT', zlib.compress(b'\x00\x00'))
        + raw_chunk(b'IEND', b'')
    )


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / 'image.png'
    path.write_bytes(png_bytes)
    return path


@pytest.fixture(name='raw_chunk')
def raw_chunk_fixture():
    return raw_chunk
