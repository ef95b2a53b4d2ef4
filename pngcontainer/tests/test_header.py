# pylint: disable=no-self-use
import struct

import pytest

from pngcontainer.tests.rawchunks import one_pixel_png


def ihdr_chunk(width=100, height=50, bit_depth=8, color_type=2,
               compression_method=0, filter_method=0, interlace_method=0):
    from pngcontainer.models import Chunk

    payload = struct.pack(
        '>IIBBBBB', width, height, bit_depth, color_type,
        compression_method, filter_method, interlace_method)
    return Chunk.build(b'IHDR', payload)


def interpret(chunk):
    from pngcontainer.header import interpret_header

    return interpret_header(chunk)


class TestInterpretHeader:
    def test_scenario(self):
        chunk = ihdr_chunk()
        assert chunk.payload == bytes.fromhex(
            '00000064' '00000032' '08' '02' '00' '00' '00')

        info = interpret(chunk)

        assert info.width == 100
        assert info.height == 50
        assert info.bit_depth == 8
        assert info.color_type == 2
        assert info.compression_method == 0
        assert info.filter_method == 0
        assert info.interlace_method == 0

    def test_enumerations(self):
        from pngcontainer import fieldvalues

        info = interpret(ihdr_chunk(color_type=6, interlace_method=1))
        assert info.color_type is fieldvalues.ColorType.rgb_alpha
        assert info.interlace_method is fieldvalues.InterlaceMethod.adam7
        assert info.compression_method is \
            fieldvalues.CompressionMethod.deflate32k
        assert info.filter_method is \
            fieldvalues.FilterMethod.adaptive_five_basic

    @pytest.mark.parametrize('color_type, bit_depths', [
        (0, [1, 2, 4, 8, 16]),
        (2, [8, 16]),
        (3, [1, 2, 4, 8]),
        (4, [8, 16]),
        (6, [8, 16]),
    ])
    def test_allowed_combinations(self, color_type, bit_depths):
        for bit_depth in bit_depths:
            info = interpret(
                ihdr_chunk(bit_depth=bit_depth, color_type=color_type))
            assert info.bit_depth == bit_depth

    def test_largest_dimensions(self):
        info = interpret(ihdr_chunk(width=2**31 - 1, height=2**31 - 1))
        assert info.width == info.height == 2**31 - 1

    def test_pack_matches_payload(self):
        chunk = ihdr_chunk(width=7, height=3, bit_depth=4, color_type=3,
                           interlace_method=1)
        info = interpret(chunk)
        assert info.pack() == chunk.payload
        assert info.to_chunk() == chunk

    def test_read_header(self):
        from pngcontainer.header import read_header
        from pngcontainer.lexer import parse

        info = read_header(parse(one_pixel_png))
        assert (info.width, info.height) == (1, 1)
        assert info.color_type == 2


class TestMalformedHeader:
    def test_wrong_type(self):
        from pngcontainer.exceptions import MalformedHeader
        from pngcontainer.models import Chunk

        chunk = Chunk.build(b'IHDX', ihdr_chunk().payload)
        with pytest.raises(MalformedHeader) as excinfo:
            interpret(chunk)
        assert excinfo.value.field == 'type'

    @pytest.mark.parametrize('payload', [
        b'',
        b'\x00' * 12,
        b'\x00' * 14,
    ])
    def test_wrong_length(self, payload):
        from pngcontainer.exceptions import MalformedHeader
        from pngcontainer.models import Chunk

        with pytest.raises(MalformedHeader) as excinfo:
            interpret(Chunk.build(b'IHDR', payload))
        assert excinfo.value.field == 'length'
        assert excinfo.value.value == len(payload)

    @pytest.mark.parametrize('fields, bad_field', [
        (dict(width=0), 'width'),
        (dict(height=0), 'height'),
        (dict(width=2**31), 'width'),
        (dict(height=2**32 - 1), 'height'),
        (dict(bit_depth=0), 'bit_depth'),
        (dict(bit_depth=3), 'bit_depth'),
        (dict(bit_depth=32), 'bit_depth'),
        (dict(color_type=1), 'color_type'),
        (dict(color_type=7), 'color_type'),
        (dict(bit_depth=16, color_type=3), 'bit_depth'),
        (dict(bit_depth=4, color_type=2), 'bit_depth'),
        (dict(bit_depth=1, color_type=6), 'bit_depth'),
        (dict(compression_method=1), 'compression_method'),
        (dict(filter_method=1), 'filter_method'),
        (dict(interlace_method=2), 'interlace_method'),
    ])
    def test_field_out_of_range(self, fields, bad_field):
        from pngcontainer.exceptions import MalformedHeader

        with pytest.raises(MalformedHeader) as excinfo:
            interpret(ihdr_chunk(**fields))
        assert excinfo.value.field == bad_field
        assert bad_field in str(excinfo.value)

    def test_message(self):
        from pngcontainer.exceptions import MalformedHeader

        with pytest.raises(MalformedHeader) as excinfo:
            interpret(ihdr_chunk(bit_depth=16, color_type=3))
        assert str(excinfo.value) == (
            "Malformed IHDR bit_depth 16: "
            "not supported with color type 3:indexed"
        )
