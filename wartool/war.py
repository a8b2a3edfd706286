import logging
from collections import namedtuple
from pathlib import Path

from construct import ConstructError, ValidationError

from wartool import lz
from wartool.warstructs import (
    COMPRESSED, DEMO_FORMAT, RAW, SENTINEL, EntryHeader, WARHeader,
)

logger = logging.getLogger(__name__)

U32 = 0xFFFFFFFF


class WarError(Exception):
    pass


class InvalidFormat(WarError):
    pass


class TruncatedEntry(WarError, EOFError):
    def __init__(self, index, reason):
        super().__init__("entry %d is truncated: %s" % (index, reason))
        self.index = index


class UnknownCompressionFlag(WarError):
    def __init__(self, flag, index):
        super().__init__("unknown compression flag %#04x in entry %d" % (flag, index))
        self.flag = flag
        self.index = index


class Entry(namedtuple("Entry", "position length")):
    __slots__ = ()

    @property
    def valid(self):
        return self.position != SENTINEL


def build_entries(offsets, total):
    """Pair each directory offset with the length of its payload.

    A valid slot runs up to the next valid slot's offset. The last slot
    always runs to the end of the buffer, sentinel or not. Arithmetic is
    unsigned 32-bit, so out of order offsets wrap rather than raise.
    """
    positions = list(offsets)
    lengths = [0] * len(positions)
    last_valid = None

    for i, position in enumerate(positions):
        valid = position != SENTINEL
        if i > 0 and valid and last_valid is not None:
            lengths[last_valid] = (position - positions[last_valid]) & U32
        if valid:
            last_valid = i

    if positions:
        lengths[-1] = (total - positions[-1]) & U32

    return tuple(Entry(p, l) for p, l in zip(positions, lengths))


def _read_raw(payload, length):
    if len(payload) < length:
        raise EOFError("raw data ended after %d of %d bytes" % (len(payload), length))
    return bytes(payload[:length])

_decoders = {
    RAW: _read_raw,
    COMPRESSED: lz.decompress,
}


def get_entry(archive, index):
    entry = archive.entries[index]
    if not entry.valid:
        raise ValueError("entry %d is an unused directory slot" % index)

    data = archive.data
    try:
        hdr = EntryHeader.parse(data[entry.position:entry.position + EntryHeader.sizeof()])
    except ConstructError as e:
        raise TruncatedEntry(index, "no header at offset %d" % entry.position) from e
    decoder = _decoders.get(hdr.flag)
    if decoder is None:
        raise UnknownCompressionFlag(hdr.flag, index)

    logger.debug("entry %d: flag=%#04x length=%d", index, hdr.flag, hdr.length)
    payload = memoryview(data)[entry.position + EntryHeader.sizeof():]
    try:
        return decoder(payload, hdr.length)
    except EOFError as e:
        raise TruncatedEntry(index, e) from e


class Archive:
    __slots__ = "_path", "_data", "_format", "_type", "_entries"

    def __init__(self, data, format, type, entries, path=None):
        self._path = path
        self._data = bytes(data)
        self._format = format
        self._type = type
        self._entries = tuple(entries)

    path    = property(lambda self: self._path)
    data    = property(lambda self: self._data)
    format  = property(lambda self: self._format)
    type    = property(lambda self: self._type)
    entries = property(lambda self: self._entries)

    @property
    def is_demo_data(self):
        return self._format == DEMO_FORMAT

    def get_entry(self, index):
        return get_entry(self, index)

    def __len__(self):
        return len(self._entries)

    def valid_entries(self):
        for index, entry in enumerate(self._entries):
            if entry.valid:
                yield index, entry

    def __repr__(self):
        return "<Archive %s format=%d type=%d entries=%d>" % (
            self._path or "(memory)", self._format, self._type, len(self._entries))


def parse(data, path=None):
    data = bytes(data)
    try:
        hdr = WARHeader.parse(data)
    except ValidationError as e:
        raise InvalidFormat("invalid format code in %s" % (path or "archive")) from e
    except ConstructError as e:
        raise InvalidFormat("truncated header in %s" % (path or "archive")) from e

    logger.debug("format=%d type=%d count=%d", hdr.format, hdr.type, hdr.count)
    entries = build_entries(hdr.offsets, len(data))
    return Archive(data, hdr.format, hdr.type, entries, path=path)


def open(path):
    path = Path(path)
    return parse(path.read_bytes(), path=path)


__all__ = [
    "Archive", "Entry", "WarError", "InvalidFormat", "UnknownCompressionFlag",
    "TruncatedEntry", "build_entries", "get_entry", "parse", "open",
]
