import struct

import attr

from pngcontainer import checksum
from pngcontainer import chunktypes
from pngcontainer import fieldvalues


# Fields are width, height, bit depth, color type, compression method,
# filter method, and interlace method
IMAGE_HEADER_STRUCT = struct.Struct('>IIBBBBB')


_valid_bytes = attr.validators.instance_of(bytes)


@attr.attributes(frozen=True)
class Chunk:
    """
    One framed chunk of a PNG stream.

    :ivar type_tag: The 4-byte chunk type code
    :ivar payload: The chunk data, ``declared_length`` bytes
    :ivar crc: The CRC-32 stored in the chunk's trailer
    :ivar position:
        Where the chunk's length field started in the source stream, or
        ``None`` for chunks that were built in memory
    """
    type_tag = attr.attr(
        validator=chunktypes.valid_chunk_type_code)  # type: bytes
    payload = attr.attr(validator=_valid_bytes, repr=False)  # type: bytes
    crc = attr.attr(
        validator=attr.validators.instance_of(int), repr=hex)  # type: int
    position = attr.attr(default=None, eq=False)  # type: int

    @classmethod
    def build(cls, type_tag, payload=b''):
        """
        Create a chunk carrying the correct checksum for its contents.
        """
        return cls(type_tag, payload, checksum.chunk_crc(type_tag, payload))

    @property
    def declared_length(self):
        return len(self.payload)

    @property
    def name(self):
        return self.type_tag.decode('utf-8', 'backslashreplace')

    @property
    def chunk_type(self):
        return chunktypes.ChunkType(self.type_tag)

    @property
    def computed_crc(self):
        return checksum.chunk_crc(self.type_tag, self.payload)

    @property
    def crc_ok(self):
        return self.crc == self.computed_crc

    @property
    def is_header(self):
        return self.type_tag == chunktypes.IMAGE_HEADER.code

    @property
    def is_terminator(self):
        return self.type_tag == chunktypes.IMAGE_TRAILER.code

    def with_valid_crc(self):
        """
        Return this chunk, or a copy with the stored CRC replaced by the
        computed one if they differ.
        """
        if self.crc_ok:
            return self
        return attr.evolve(self, crc=self.computed_crc)


def _valid_chunk_sequence(instance, attribute, value):
    if not value:
        raise ValueError("A container needs at least one chunk")
    for chunk in value:
        if not isinstance(chunk, Chunk):
            raise TypeError("Container items must be Chunk, not {type}".format(
                type=type(chunk)))
    if not value[0].is_header:
        raise ValueError("First chunk must be IHDR, not {code!r}".format(
            code=value[0].type_tag))
    trailers = [i for i, chunk in enumerate(value) if chunk.is_terminator]
    if trailers != [len(value) - 1]:
        fmt = "Exactly one IEND chunk must end the container, found at {at}"
        raise ValueError(fmt.format(at=trailers))


@attr.attributes(frozen=True)
class Container:
    """
    The ordered chunks of a PNG stream, from IHDR through IEND.

    Instances are immutable; use :meth:`replace_chunk` or
    :func:`attr.evolve` to derive a modified container.
    """
    chunks = attr.attr(converter=tuple, validator=_valid_chunk_sequence)

    def __iter__(self):
        return iter(self.chunks)

    def __len__(self):
        return len(self.chunks)

    def __getitem__(self, index):
        return self.chunks[index]

    @property
    def header_chunk(self):
        return self.chunks[0]

    def chunks_of_type(self, type_tag):
        return [chunk for chunk in self.chunks if chunk.type_tag == type_tag]

    @property
    def image_data(self):
        """
        The IDAT payloads concatenated in stream order, as a decoder
        would consume them.
        """
        return b''.join(
            chunk.payload
            for chunk in self.chunks_of_type(chunktypes.IMAGE_DATA.code)
        )

    def bad_crc_indexes(self):
        return [i for i, chunk in enumerate(self.chunks) if not chunk.crc_ok]

    def replace_chunk(self, index, chunk):
        chunks = list(self.chunks)
        chunks[index] = chunk
        return attr.evolve(self, chunks=chunks)


@attr.attributes(frozen=True)
class HeaderInfo:
    """
    The decoded IHDR payload.

    The enumerated fields hold :mod:`pngcontainer.fieldvalues` members,
    which compare equal to the raw integers.
    """
    width = attr.attr()  # type: int
    height = attr.attr()  # type: int
    bit_depth = attr.attr()  # type: int
    color_type = attr.attr()  # type: fieldvalues.ColorType
    compression_method = attr.attr(
        default=fieldvalues.CompressionMethod.deflate32k)
    filter_method = attr.attr(
        default=fieldvalues.FilterMethod.adaptive_five_basic)
    interlace_method = attr.attr(default=fieldvalues.InterlaceMethod.none)

    def pack(self):
        return IMAGE_HEADER_STRUCT.pack(
            self.width,
            self.height,
            self.bit_depth,
            self.color_type,
            self.compression_method,
            self.filter_method,
            self.interlace_method,
        )

    def to_chunk(self):
        return Chunk.build(chunktypes.IMAGE_HEADER.code, self.pack())
