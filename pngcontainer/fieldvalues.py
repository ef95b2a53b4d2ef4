"""
Enumerations for easier interpretation of IHDR flags and values.

Members are integers so a decoded header compares equal to the raw
byte values.
"""
import enum


class ColorType(enum.IntEnum):
    grayscale = 0
    rgb = 2
    indexed = 3
    grayscale_alpha = 4
    rgb_alpha = 6


class CompressionMethod(enum.IntEnum):
    deflate32k = 0


class FilterMethod(enum.IntEnum):
    adaptive_five_basic = 0


class InterlaceMethod(enum.IntEnum):
    none = 0
    adam7 = 1
