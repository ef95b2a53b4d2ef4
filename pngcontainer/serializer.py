"""
Turning a :class:`models.Container` back into PNG bytes.
"""
import enum
import logging
import struct

from pngcontainer import exceptions as exc
from pngcontainer.lexer import PNG_SIGNATURE


logger = logging.getLogger(__name__)

_LENGTH_TYPE_STRUCT = struct.Struct('>I4s')
_CRC_STRUCT = struct.Struct('>I')


@enum.unique
class CRCMode(enum.Enum):
    """
    Where the CRC trailer of each written chunk comes from.

    ``verbatim`` reproduces an unmodified source byte for byte.
    ``recomputed`` always produces chunks that pass verification.
    """
    verbatim = 'verbatim'
    recomputed = 'recomputed'


def iter_container_bytes(container, mode=CRCMode.verbatim):
    """
    Yield the signature, then the length and type, payload, and CRC of
    every chunk in order.
    """
    mode = CRCMode(mode)
    logger.debug(
        'Serializing %d chunks, %s CRCs', len(container), mode.value)
    yield PNG_SIGNATURE
    for chunk in container:
        if mode is CRCMode.recomputed:
            crc = chunk.computed_crc
        else:
            crc = chunk.crc
        yield _LENGTH_TYPE_STRUCT.pack(chunk.declared_length, chunk.type_tag)
        if chunk.payload:
            yield chunk.payload
        yield _CRC_STRUCT.pack(crc)


def serialize(container, mode=CRCMode.verbatim):
    return b''.join(iter_container_bytes(container, mode))


def write(container, stream, mode=CRCMode.verbatim):
    """
    Write the serialized container to a binary file object.

    Return the number of bytes written. A failed write raises
    :exc:`exceptions.IoFailure`; whatever reached the stream before
    then is left as is.
    """
    total = 0
    for part in iter_container_bytes(container, mode):
        try:
            stream.write(part)
        except OSError as e:
            target = getattr(stream, 'name', repr(stream))
            raise exc.IoFailure('write', target) from e
        total += len(part)
    return total
