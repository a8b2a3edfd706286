#!/usr/bin/env python3
import sys
import logging
from pathlib import Path
from argparse import ArgumentParser

from wartool import war
from wartool.palette import convert_palette, palette_image

logger = logging.getLogger(__name__)

def setup_logging(verbose=False):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.handlers = [handler]

def cmd_list(args):
    archive = war.open(args.file)

    print("Index", "Offset", "Length", "Valid", sep='\t')
    for idx, entry in enumerate(archive.entries):
        print(idx, hex(entry.position), entry.length, entry.valid, sep='\t')
    print("format=%d type=%d demo=%s entries=%d" % (
        archive.format, archive.type, archive.is_demo_data, len(archive)))

def cmd_extract(args):
    archive = war.open(args.file)
    args.out.mkdir(parents=True, exist_ok=True)

    indexes = args.index if args.index else range(len(archive))
    for idx in indexes:
        if not archive.entries[idx].valid:
            logger.info("skipping unused slot %d", idx)
            continue
        path = args.out / ("%04d.bin" % idx)
        path.write_bytes(archive.get_entry(idx))
        logger.info("wrote %s", path)

def cmd_palette(args):
    archive = war.open(args.file)
    pal = convert_palette(bytearray(archive.get_entry(args.index)))
    palette_image(pal).save(args.out)
    logger.info("wrote %s", args.out)

argparser = ArgumentParser(prog="wartool", description="Read WAR game data containers")
argparser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
subparsers = argparser.add_subparsers(dest="command", required=True)

p = subparsers.add_parser("list", help="print the entry directory")
p.add_argument("file", type=Path)
p.set_defaults(func=cmd_list)

p = subparsers.add_parser("extract", help="decode entries to OUT/NNNN.bin")
p.add_argument("file", type=Path)
p.add_argument("out", type=Path)
p.add_argument("-i", "--index", type=int, action="append", help="entry to extract, may repeat")
p.set_defaults(func=cmd_extract)

p = subparsers.add_parser("palette", help="save an entry as a palette swatch image")
p.add_argument("file", type=Path)
p.add_argument("index", type=int)
p.add_argument("out", type=Path)
p.set_defaults(func=cmd_palette)

def main(argv=None):
    args = argparser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        args.func(args)
    except war.WarError as e:
        sys.stderr.write("wartool: error: %s\n" % e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
