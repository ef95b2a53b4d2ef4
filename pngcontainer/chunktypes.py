"""
Chunk type codes with a structural meaning for the container.

Every other code is carried through opaquely.
"""
import attr


PNG_CHUNK_TYPE_PROPERTY_BITMASK = 0b00100000
PNG_CHUNK_TYPE_CODE_LENGTH = 4


_valid_bytes = attr.validators.instance_of(bytes)


def decode_chunk_type_code(code):
    """
    Return the type code as text, raising :exc:`UnicodeDecodeError` (a
    :exc:`ValueError`) if it is not valid UTF-8.
    """
    return code.decode('utf-8')


def valid_chunk_type_code(instance, attribute, value):
    _valid_bytes(instance, attribute, value)
    if len(value) != PNG_CHUNK_TYPE_CODE_LENGTH:
        raise ValueError("{!r} must be exactly 4 bytes long".format(
            attribute.name))
    try:
        decode_chunk_type_code(value)
    except UnicodeDecodeError:
        raise ValueError("{!r} must be valid UTF-8, got {value!r}".format(
            attribute.name, value=value)) from None


@attr.attributes(frozen=True)
class ChunkType:
    """
    A 4-byte chunk type code.

    The case bit (0x20) of each byte carries a property of the chunk;
    they are exposed here for diagnostics only.
    """
    code = attr.attr(validator=valid_chunk_type_code)  # type: bytes

    @property
    def ancillary(self):
        return bool(self.code[0] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def private(self):
        return bool(self.code[1] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def reserved(self):
        return bool(self.code[2] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def safe_to_copy(self):
        return bool(self.code[3] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)


IMAGE_HEADER = ChunkType(b'IHDR')
IMAGE_DATA = ChunkType(b'IDAT')
IMAGE_TRAILER = ChunkType(b'IEND')
