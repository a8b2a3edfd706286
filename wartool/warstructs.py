from construct import Array, Int8ul, Int16ul, Int24ul, Int32ul, OneOf, Struct, this

DEMO_FORMAT = 24
FORMATS = (DEMO_FORMAT, 25) # wc2 demo, wc2

SENTINEL = 0xFFFFFFFF # unused directory slot

RAW = 0x00
COMPRESSED = 0x20

# OneOf fails before anything past the format code is read
WARFormat = OneOf(Int32ul, FORMATS)

WARHeader = Struct(
    "format"  / WARFormat,
    "count"   / Int16ul,
    "type"    / Int16ul,
    "offsets" / Array(this.count, Int32ul),
)

# u32le: flag in the top byte, uncompressed length in the low 24 bits
EntryHeader = Struct(
    "length" / Int24ul,
    "flag"   / Int8ul,
)

__all__ = [
    "DEMO_FORMAT", "FORMATS", "SENTINEL", "RAW", "COMPRESSED",
    "WARFormat", "WARHeader", "EntryHeader",
]
