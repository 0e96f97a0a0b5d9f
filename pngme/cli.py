import argparse
import logging
import os
import sys

import pngme
from .chunktype import ChunkType
from .png import PngChunk, is_url
from .pngexceptions import PngmeException


logger = logging.getLogger(__name__)


def encode(args):
    png = pngme.open(args.file)
    chunk = PngChunk(ChunkType.from_str(args.chunk_type), args.message.encode('utf-8'))
    png.append_chunk(chunk)
    output = args.output or args.file
    png.save(output)
    logger.info("Hid %d bytes in a %s chunk of %s", chunk.length, chunk.type, output)
    return 0


def decode(args):
    png = pngme.open(args.file)
    chunk = png.chunk_by_type(args.chunk_type)
    if chunk is None:
        logger.error("No %s chunk in %s", args.chunk_type, args.file)
        return 1
    print(chunk.data_as_string())
    return 0


def remove(args):
    png = pngme.open(args.file)
    chunk = png.remove_chunk(args.chunk_type)
    output = args.output or args.file
    png.save(output)
    logger.info("Removed %r from %s", chunk, output)
    return 0


def print_chunks(args):
    png = pngme.open(args.file)
    for index, chunk in enumerate(png.chunks):
        print('[{:02d}] {} length={} crc={:#010x}'.format(index, chunk.type, chunk.length, chunk.crc))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pngme',
        description='Hide messages in PNG chunks',
    )
    parser.add_argument('--version', action='version', version='%(prog)s {}'.format(pngme.__version__))
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode_parser = subparsers.add_parser('encode', help='Hide a message in a new chunk')
    encode_parser.add_argument('file', help='PNG file or http(s) URL')
    encode_parser.add_argument('chunk_type', help='Four letters chunk type, e.g. ruSt')
    encode_parser.add_argument('message', help='Message to hide')
    encode_parser.add_argument('-o', '--output', help='Output file (default: overwrite the input)')
    encode_parser.set_defaults(func=encode)

    decode_parser = subparsers.add_parser('decode', help='Print the message hidden in a chunk')
    decode_parser.add_argument('file', help='PNG file or http(s) URL')
    decode_parser.add_argument('chunk_type', help='Four letters chunk type')
    decode_parser.set_defaults(func=decode)

    remove_parser = subparsers.add_parser('remove', help='Remove the first chunk of a type')
    remove_parser.add_argument('file', help='PNG file or http(s) URL')
    remove_parser.add_argument('chunk_type', help='Four letters chunk type')
    remove_parser.add_argument('-o', '--output', help='Output file (default: overwrite the input)')
    remove_parser.set_defaults(func=remove)

    print_parser = subparsers.add_parser('print', help='List the chunks of an image')
    print_parser.add_argument('file', help='PNG file or http(s) URL')
    print_parser.set_defaults(func=print_chunks)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, 'output', False) is None and is_url(args.file):
        parser.error("{}: -o/--output is required when reading from a URL".format(args.command))

    debug = args.verbose or 'PNGME_DEBUG' in os.environ
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        return args.func(args)
    except (PngmeException, OSError) as e:
        logger.error("%s: %s", args.file, e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
