import logging
from array import array

logger = logging.getLogger(__name__)

WINDOW_SIZE = 4096
WINDOW_MASK = WINDOW_SIZE - 1

def decompress(data, length):
    """Decode `length` bytes of WAR LZ data.

    `data` starts at the first control byte. Control bits are consumed low
    bit first: 0 is a literal byte, 1 is a little-endian word holding a
    12-bit window offset and a 4-bit run (+3). Copies go through a zeroed
    4096-byte ring and may read bytes written by the same copy.
    """
    data = memoryview(data)
    window = array('B', bytes(WINDOW_SIZE))
    out = bytearray()
    src = 0
    pos = 0

    try:
        while pos < length:
            flags = data[src]
            src += 1
            for _ in range(8):
                if not flags & 1:
                    j = data[src]
                    src += 1
                    window[pos & WINDOW_MASK] = j
                    out.append(j)
                    pos += 1
                else:
                    o = data[src] | data[src + 1] << 8
                    src += 2
                    run = (o >> 12) + 3
                    o &= WINDOW_MASK
                    for _ in range(run):
                        b = window[o & WINDOW_MASK]
                        window[pos & WINDOW_MASK] = b
                        out.append(b)
                        o += 1
                        pos += 1
                        if pos == length:
                            break
                if pos == length:
                    break
                flags >>= 1
    except IndexError:
        raise EOFError("compressed data ended after %d of %d bytes" % (pos, length)) from None

    logger.debug("decompressed %d input bytes into %d", src, pos)
    return bytes(out)

__all__ = ["decompress", "WINDOW_SIZE"]
