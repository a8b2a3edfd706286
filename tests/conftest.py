"""
Shared helpers for WAR container tests.

Provides:
- make_war: assemble a container from raw offsets and a payload region
- raw_entry / compressed_entry: payload records with their u32 header
- lz_compress: a greedy encoder producing streams the decoder must accept
"""

import struct

import pytest


def make_war(offsets, payload=b"", format=25, type=0, pad=0):
    """Header + directory, `pad` filler bytes, then `payload`."""
    head = struct.pack("<IHH", format, len(offsets), type)
    head += b"".join(struct.pack("<I", o) for o in offsets)
    return head + b"\x00" * pad + payload


def raw_entry(data):
    return struct.pack("<I", len(data)) + data


def compressed_entry(stream, length):
    return struct.pack("<I", 0x20 << 24 | length) + stream


def lz_compress(data):
    """Greedy encoder limited to matches inside the 4095 most recent bytes."""
    out = bytearray()
    pos = 0
    while pos < len(data):
        flag_at = len(out)
        out.append(0)
        flags = 0
        for bit in range(8):
            if pos >= len(data):
                break
            best_len, best_src = 0, 0
            for src in range(max(0, pos - 4095), pos):
                n = 0
                while n < 18 and pos + n < len(data) and data[src + n] == data[pos + n]:
                    n += 1
                if n > best_len:
                    best_len, best_src = n, src
                    if n == 18:
                        break
            if best_len >= 3:
                flags |= 1 << bit
                out += struct.pack("<H", (best_len - 3) << 12 | (best_src & 0xFFF))
                pos += best_len
            else:
                out.append(data[pos])
                pos += 1
        out[flag_at] = flags
    return bytes(out)


@pytest.fixture
def hello_war():
    """The single raw entry "HELLO" at offset 16 of a 25 byte container."""
    return make_war([16], raw_entry(b"HELLO"), pad=4)


@pytest.fixture
def war_file(tmp_path):
    """Write container bytes to disk and return the path."""
    def write(data, name="test.war"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return write
