from wartool.war import (
    Archive, Entry, WarError, InvalidFormat, UnknownCompressionFlag, TruncatedEntry,
    get_entry, open, parse,
)
from wartool.lz import decompress
from wartool.palette import convert_palette, palette_image

__all__ = [
    "Archive", "Entry", "WarError", "InvalidFormat", "UnknownCompressionFlag", "TruncatedEntry",
    "get_entry", "open", "parse", "decompress", "convert_palette", "palette_image",
]
