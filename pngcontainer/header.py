"""
Interpretation of the IHDR chunk.
"""
from types import MappingProxyType

from pngcontainer import chunktypes
from pngcontainer import fieldvalues
from pngcontainer import models
from pngcontainer.exceptions import MalformedHeader


PNG_MAX_HEIGHT = PNG_MAX_WIDTH = 2**31 - 1
PNG_MIN_WIDTH = PNG_MIN_HEIGHT = 1


class ImageHeaderInterpreter:
    """
    Decode and range-check the 13-byte IHDR payload of ``chunk``.

    Call :meth:`interpret` to get the :class:`models.HeaderInfo`.
    """
    _FIELD_STRUCT = models.IMAGE_HEADER_STRUCT

    chunk_type = chunktypes.IMAGE_HEADER
    data_size = _FIELD_STRUCT.size  # 13 bytes

    _ALLOWED_BIT_DEPTHS = frozenset([1, 2, 4, 8, 16])
    _COLOR_TYPE_BIT_DEPTHS = MappingProxyType({
        fieldvalues.ColorType.grayscale: frozenset([1, 2, 4, 8, 16]),
        fieldvalues.ColorType.rgb: frozenset([8, 16]),
        fieldvalues.ColorType.indexed: frozenset([1, 2, 4, 8]),
        fieldvalues.ColorType.grayscale_alpha: frozenset([8, 16]),
        fieldvalues.ColorType.rgb_alpha: frozenset([8, 16]),
    })

    def __init__(self, chunk):
        self.chunk = chunk

    def interpret(self):
        self._validate_type()
        self._validate_length()
        (
            width, height, bit_depth, color_type, compression_method,
            filter_method, interlace_method
        ) = self._FIELD_STRUCT.unpack(self.chunk.payload)

        self._validate_dimension('width', width)
        self._validate_dimension('height', height)
        self._validate_bit_depth(bit_depth)

        color_type = self._parse_value_to_enum_member(
            fieldvalues.ColorType, 'color_type', color_type)
        self._validate_bit_depth_allowed_with_color_type(bit_depth, color_type)

        compression_method = self._parse_value_to_enum_member(
            fieldvalues.CompressionMethod,
            'compression_method',
            compression_method
        )
        filter_method = self._parse_value_to_enum_member(
            fieldvalues.FilterMethod, 'filter_method', filter_method)
        interlace_method = self._parse_value_to_enum_member(
            fieldvalues.InterlaceMethod,
            'interlace_method',
            interlace_method
        )
        return models.HeaderInfo(
            width,
            height,
            bit_depth,
            color_type,
            compression_method,
            filter_method,
            interlace_method
        )

    def _validate_type(self):
        if self.chunk.type_tag != self.chunk_type.code:
            raise MalformedHeader(
                'type', self.chunk.type_tag, 'expected IHDR')

    def _validate_length(self):
        length = len(self.chunk.payload)
        if length != self.data_size:
            raise MalformedHeader(
                'length',
                length,
                'IHDR data must be {expected} bytes'.format(
                    expected=self.data_size),
            )

    def _validate_dimension(self, field, value):
        # pylint: disable=no-self-use
        if value > PNG_MAX_WIDTH:
            raise MalformedHeader(field, value, 'too large')
        if value < PNG_MIN_WIDTH:
            raise MalformedHeader(field, value, 'must be at least 1')

    def _validate_bit_depth(self, bit_depth):
        if bit_depth not in self._ALLOWED_BIT_DEPTHS:
            raise MalformedHeader(
                'bit_depth', bit_depth, 'not a supported bit depth')

    def _validate_bit_depth_allowed_with_color_type(self, bit_depth,
                                                    color_type):
        if bit_depth not in self._COLOR_TYPE_BIT_DEPTHS[color_type]:
            fmt = "not supported with color type {typeint}:{type}"
            raise MalformedHeader('bit_depth', bit_depth, fmt.format(
                typeint=color_type.value,
                type=color_type.name
            ))

    def _parse_value_to_enum_member(self, enumeration, field, value):
        """
        Return the enumeration member for the value, or raise
        :exc:`exceptions.MalformedHeader` naming ``field`` if the value
        is not a valid member value.
        """
        # pylint: disable=no-self-use
        try:
            return enumeration(value)
        except ValueError:
            raise MalformedHeader(field, value, 'not a defined value') from None


def interpret_header(chunk):
    """
    Return the :class:`models.HeaderInfo` decoded from an IHDR chunk.
    """
    return ImageHeaderInterpreter(chunk).interpret()


def read_header(container):
    return interpret_header(container.header_chunk)
