import logging
import struct

from pngcontainer import checksum
from pngcontainer import chunktypes
from pngcontainer import exceptions as exc
from pngcontainer import models


logger = logging.getLogger(__name__)


PNG_SIGNATURE = bytes([
    # High bit set to detect non-8-bit-clean transmission
    0x89,
    # ASCII letters PNG
    0x50, 0x4E, 0x47,
    # DOS line ending (CRLF)
    0x0D, 0x0A,
    # end-of-file charater
    0x1A,
    # Unix line ending (LF)
    0x0A
])

_UINT32 = struct.Struct('>I')


class ByteCursor(object):
    """
    A forward-only read position over an in-memory buffer.

    The buffer is wrapped in a :class:`memoryview`, so reads slice it
    without copying until the bytes are handed out.

    :ivar offset: Number of bytes consumed so far
    :type offset: int
    """
    def __init__(self, buffer):
        self._view = memoryview(buffer).cast('B')
        self.offset = 0

    @property
    def remaining(self):
        return len(self._view) - self.offset

    def read(self, length):
        """
        Consume and return exactly ``length`` bytes.

        If fewer are left, raise :exc:`exceptions.UnexpectedEOF` and
        leave the offset unchanged.
        """
        if length > self.remaining:
            raise exc.UnexpectedEOF(length, self.remaining, self.offset)
        start = self.offset
        self.offset += length
        return self._view[start:self.offset].tobytes()


def validate_signature(cursor):
    """
    Consume the 8-byte PNG magic number from ``cursor``, raising
    :exc:`exceptions.InvalidSignature` if it is short or wrong.
    """
    try:
        header = cursor.read(len(PNG_SIGNATURE))
    except exc.UnexpectedEOF as e:
        raise exc.InvalidSignature(cursor.read(cursor.remaining)) from e
    if header != PNG_SIGNATURE:
        raise exc.InvalidSignature(header)
    logger.debug('Signature OK')


class ChunkStream(object):
    """
    Produces the chunks of a PNG byte stream in stream order.

    Responsible for the low-level framing of a PNG stream:

    -   Signature (PNG magic number)
    -   Chunk length, type code, payload and CRC32 trailer
    -   CRC32 verification of every chunk
    -   IHDR first, and stopping at IEND

    Iteration is lazy; each chunk is yielded once it has been fully
    framed and its checksum verified. Any problem raises a
    :exc:`exceptions.DecodeError` subclass and ends the iteration.

    """
    def __init__(self, data):
        self._cursor = ByteCursor(data)

    @property
    def total_bytes_read(self):
        return self._cursor.offset

    def __iter__(self):
        validate_signature(self._cursor)
        index = 0
        while True:
            chunk = self._get_chunk(index)
            if index == 0 and not chunk.is_header:
                raise exc.MalformedHeader(
                    'type', chunk.type_tag, 'first chunk must be IHDR')
            yield chunk
            if chunk.is_terminator:
                break
            index += 1

        if chunk.payload:
            logger.warning(
                'IEND chunk carries %d payload bytes', len(chunk.payload))
        if self._cursor.remaining:
            logger.warning(
                'Ignoring %d bytes after IEND', self._cursor.remaining)

    def _get_chunk(self, index):
        position = self._cursor.offset
        [length] = _UINT32.unpack(self._read_field('length', 4, index))
        type_tag = self._read_field('type', 4, index)
        try:
            chunktypes.decode_chunk_type_code(type_tag)
        except ValueError as e:
            raise exc.InvalidChunkType(index, position + 4, type_tag) from e
        payload = self._read_field('payload', length, index)
        [stored_crc] = _UINT32.unpack(self._read_field('crc', 4, index))

        computed_crc = checksum.chunk_crc(type_tag, payload)
        if stored_crc != computed_crc:
            raise exc.ChecksumMismatch(
                index, type_tag, stored_crc, computed_crc)

        chunk = models.Chunk(type_tag, payload, stored_crc, position)
        logger.debug(
            'Chunk %d at offset %d: %r, %d bytes, crc 0x%08X',
            index, position, type_tag, length, stored_crc
        )
        return chunk

    def _read_field(self, field, length, index):
        position = self._cursor.offset
        try:
            return self._cursor.read(length)
        except exc.UnexpectedEOF as e:
            raise exc.TruncatedChunk(
                field, index, position, length, e.available) from e


def parse(data):
    """
    Parse a complete PNG byte string into a
    :class:`models.Container`.

    Nothing is returned unless the whole stream, through IEND, is valid.
    """
    return models.Container(ChunkStream(data))


def parse_stream(stream):
    """
    Read a binary file object to its end and parse it.
    """
    try:
        data = stream.read()
    except OSError as e:
        target = getattr(stream, 'name', repr(stream))
        raise exc.IoFailure('read', target) from e
    return parse(data)

