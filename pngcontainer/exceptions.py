class ContainerError(Exception):
    """
    Base class for every error reported by pngcontainer.

    Subclasses keep their diagnostic details as attributes and render
    the message on demand in :meth:`describe`.
    """
    def describe(self):
        return super().__str__()

    def __str__(self):
        return self.describe()


class DecodeError(ContainerError):
    pass


class UnexpectedEOF(DecodeError):
    def __init__(self, requested, available, offset):
        super().__init__(requested, available, offset)
        self.requested = requested
        self.available = available
        self.offset = offset

    def describe(self):
        fmt = "Expected to read {requested}, got {available}, at offset {offset}"
        return fmt.format(
            requested=self.requested,
            available=self.available,
            offset=self.offset,
        )


class InvalidSignature(DecodeError):
    def __init__(self, actual):
        super().__init__(actual)
        self.actual = actual

    def describe(self):
        return "Invalid PNG signature, got {actual!r}".format(
            actual=self.actual)


class TruncatedChunk(DecodeError):
    """
    The stream ended while reading one of the chunk's fields.

    :ivar field: One of ``'length'``, ``'type'``, ``'payload'``, ``'crc'``
    :ivar index: Index of the chunk being framed
    :ivar position: Byte offset where the field starts
    :ivar expected: Number of bytes the field needs
    :ivar available: Number of bytes left in the stream
    """
    def __init__(self, field, index, position, expected, available):
        super().__init__(field, index, position, expected, available)
        self.field = field
        self.index = index
        self.position = position
        self.expected = expected
        self.available = available

    def describe(self):
        fmt = (
            "Truncated chunk {index}: {field} needs {expected} bytes at "
            "offset {position}, only {available} available"
        )
        return fmt.format(
            index=self.index,
            field=self.field,
            expected=self.expected,
            position=self.position,
            available=self.available,
        )


class InvalidChunkType(DecodeError):
    def __init__(self, index, position, raw):
        super().__init__(index, position, raw)
        self.index = index
        self.position = position
        self.raw = raw

    def describe(self):
        fmt = "Undecodable type code {raw!r} for chunk {index} at offset {position}"
        return fmt.format(raw=self.raw, index=self.index, position=self.position)


class ChecksumMismatch(DecodeError):
    def __init__(self, index, type_tag, stored, computed):
        super().__init__(index, type_tag, stored, computed)
        self.index = index
        self.type_tag = type_tag
        self.stored = stored
        self.computed = computed

    def describe(self):
        fmt = (
            "Bad CRC for chunk {index} ({tag}): stored 0x{stored:08X}, "
            "computed 0x{computed:08X}"
        )
        return fmt.format(
            index=self.index,
            tag=self.type_tag.decode('ascii', 'backslashreplace'),
            stored=self.stored,
            computed=self.computed,
        )


class MalformedHeader(DecodeError):
    """
    The IHDR chunk is missing, has the wrong size, or holds a field
    outside the range permitted by the format.

    :ivar field: ``'type'``, ``'length'`` or the name of the header field
    :ivar value: The offending value
    :ivar reason: Short explanation
    """
    def __init__(self, field, value, reason):
        super().__init__(field, value, reason)
        self.field = field
        self.value = value
        self.reason = reason

    def describe(self):
        return "Malformed IHDR {field} {value!r}: {reason}".format(
            field=self.field, value=self.value, reason=self.reason)


class IoFailure(ContainerError):
    """
    Reading the source or writing the sink failed. The original
    :exc:`OSError` is chained as ``__cause__``.
    """
    def __init__(self, operation, target):
        super().__init__(operation, target)
        self.operation = operation
        self.target = target

    def describe(self):
        cause = self.__cause__
        fmt = "Failed to {operation} {target}"
        msg = fmt.format(operation=self.operation, target=self.target)
        if cause is not None:
            msg = "{msg}: {cause}".format(msg=msg, cause=cause)
        return msg
