"""
CRC-32 as used for PNG chunk checksums.

The reflected polynomial 0xEDB88320 is applied with an all-ones initial
value and a final inversion, which makes :func:`compute` agree with
:func:`zlib.crc32`, including its ``value`` argument for continuing a
checksum over consecutive spans.
"""

CRC32_POLYNOMIAL = 0xEDB88320
_CRC32_MASK = 0xFFFFFFFF


def _make_table():
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = CRC32_POLYNOMIAL ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


# Read-only after import
CRC32_TABLE = _make_table()


def compute(data, value=0):
    """
    Return the CRC-32 of ``data``.

    :param data: A bytes-like object
    :param value: The checksum of the preceding span, if continuing one
    :rtype: int
    """
    table = CRC32_TABLE
    crc = value ^ _CRC32_MASK
    for byte in bytes(data):
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _CRC32_MASK


def verify(data, expected):
    return compute(data) == expected


def chunk_crc(type_tag, payload):
    """
    Return the checksum a chunk must carry: CRC-32 over the type tag
    followed by the payload.
    """
    return compute(payload, compute(type_tag))
