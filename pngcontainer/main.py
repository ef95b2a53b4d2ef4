import argparse
import logging
import sys

from pngcontainer import exceptions as exc
from pngcontainer import header
from pngcontainer import serializer
from pngcontainer import storage
from pngcontainer.version import __version__

logger = logging.getLogger(__name__)


def log_chunks(container):
    for index, chunk in enumerate(container):
        logger.info(
            '%d: %s length=%d crc=0x%08X %s',
            index,
            chunk.name,
            chunk.declared_length,
            chunk.crc,
            'ok' if chunk.crc_ok else 'bad',
        )


def log_header(container):
    info = header.read_header(container)
    logger.info(
        'IHDR: %dx%d, bit depth %d, color type %s, interlace %s',
        info.width,
        info.height,
        info.bit_depth,
        info.color_type.name,
        info.interlace_method.name,
    )


def make_argument_parser():
    parser = argparse.ArgumentParser(
        prog='pngcontainer',
        description='Check the chunk structure of a PNG file.',
    )
    parser.add_argument('path', help='PNG file to read')
    parser.add_argument(
        '-o', '--output', help='write a copy of the container here')
    parser.add_argument(
        '--recompute-crc', action='store_true',
        help='recompute chunk checksums when writing the copy')
    parser.add_argument(
        '--no-header', action='store_true',
        help='skip IHDR field validation')
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument(
        '--version', action='version', version=__version__)
    return parser


def main(argv=None):
    args = make_argument_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    try:
        container = storage.read_container(args.path)
        log_chunks(container)
        if not args.no_header:
            log_header(container)
        if args.output:
            if args.recompute_crc:
                mode = serializer.CRCMode.recomputed
            else:
                mode = serializer.CRCMode.verbatim
            storage.write_container(container, args.output, mode)
    except exc.ContainerError as e:
        logger.error('%s: %s', args.path, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
