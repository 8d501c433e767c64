r"""Convert delimiter-separated text into a table from the command line.

``convert`` is the whole pipeline:
>>> print("\n".join(convert("a,b\n1,22", ",", Settings(right_align_numbers=True)).splitlines()))
|---|----|
| a | b  |
|---|----|
| 1 | 22 |
|---|----|

The program reads a file (or standard input) and writes standard output, a
new file, or the input file itself:
>>> import os, shutil, tempfile
>>> tmp = tempfile.mkdtemp()
>>> settings = os.path.join(tmp, "settings.yaml")
>>> with open(settings, "w") as f:
...     _ = f.write("upper_case_header: true\n")
>>> data = os.path.join(tmp, "data.psv")
>>> with open(data, "w", newline="") as f:
...     _ = f.write("name|qty\r\nbolt|12\r\n")
>>> out = os.path.join(tmp, "table.md")
>>> main([data, "--format", "psv", "--markdown", "--output", out, "--config", settings])
0
>>> with open(out, newline="") as f:
...     f.read().split("\r\n")
['| NAME | QTY |', '|------|-----|', '| bolt | 12  |', '']

Flags on the command line win over the settings file:
>>> main([data, "-f", "psv", "--no-upper-case-header", "--in-place", "--config", settings])
0
>>> with open(data, newline="") as f:
...     f.read().split("\r\n")
['|------|-----|', '| name | qty |', '|------|-----|', '| bolt | 12  |', '|------|-----|', '']

An empty separator does nothing, a long one is refused:
>>> main([data, "--separator", "", "--in-place", "--config", settings])
0
>>> main([data, "--separator", ",,", "--config", settings])
Traceback (most recent call last):
    ...
SystemExit: 2

Standard input keeps the newlines inside quoted columns as they are:
>>> import io, sys
>>> stdin, sys.stdin = sys.stdin, io.TextIOWrapper(io.BytesIO(b'x,"a\r\nb"\r\n'))
>>> main(["-", "--no-upper-case-header", "--output", out, "--config", settings])
0
>>> sys.stdin = stdin
>>> with open(out, newline="") as f:
...     f.read().split("\r\n")
['|---|------|', '| x | a', 'b |', '|---|------|', '']

Replacing the input can be the default, and turned off again:
>>> in_place = os.path.join(tmp, "in-place.yaml")
>>> with open(in_place, "w") as f:
...     _ = f.write("in_place: true\n")
>>> main(["-", "--config", in_place])
Traceback (most recent call last):
    ...
SystemExit: 2
>>> stdin, sys.stdin = sys.stdin, io.TextIOWrapper(io.BytesIO(b"y\n"))
>>> main(["-", "--no-in-place", "--config", in_place])
|---|
| y |
|---|
0
>>> sys.stdin = stdin

Missing input is an error:
>>> main([os.path.join(tmp, "missing.csv"), "--config", settings])
1
>>> shutil.rmtree(tmp)
"""
import argparse
import io
import logging
import sys

from config import Settings, load_settings
from parse import parse
from table import render

logger = logging.getLogger(__name__)

FORMATS = {"csv": ",", "tsv": "\t", "psv": "|", "ssv": ";"}
ESCAPES = {"\\t": "\t"}

def convert(text, separator, settings):
    records = parse(text, separator)
    return render(records,
                  upper_case_header=settings.upper_case_header,
                  use_markdown=settings.use_markdown,
                  right_align_numbers=settings.right_align_numbers)

def separator(value):
    r"""One character, or nothing at all. ``\t`` stands for a tab.

    >>> separator("\\t"), separator(";"), separator("")
    ('\t', ';', '')
    """
    value = ESCAPES.get(value, value)
    if len(value) > 1:
        raise argparse.ArgumentTypeError("expected a single character, got {!r}".format(value))
    return value

def arguments():
    parser = argparse.ArgumentParser(
        prog="csv-to-table",
        description="Render delimiter-separated text as an ASCII or Markdown table.")
    parser.add_argument("file", nargs="?", default="-",
                        help="text to convert, - for standard input (default)")

    separators = parser.add_mutually_exclusive_group()
    separators.add_argument("-f", "--format", choices=sorted(FORMATS), default="csv",
                            help="separator by format: csv ',', tsv tab, psv '|', ssv ';'")
    separators.add_argument("-s", "--separator", type=separator,
                            help="custom separator character; empty does nothing")

    flags = parser.add_argument_group("formatting")
    flags.add_argument("--upper-case-header", action=argparse.BooleanOptionalAction,
                       help="uppercase the first record")
    flags.add_argument("--markdown", dest="use_markdown", action=argparse.BooleanOptionalAction,
                       help="only put a border row under the first record")
    flags.add_argument("--right-align-numbers", action=argparse.BooleanOptionalAction,
                       help="right-align values made of digits and + - , .")

    destinations = parser.add_mutually_exclusive_group()
    destinations.add_argument("-i", "--in-place", action=argparse.BooleanOptionalAction,
                              help="replace the input file with the table")
    destinations.add_argument("-o", "--output", help="write the table to a new file")

    parser.add_argument("-c", "--config",
                        help="YAML settings file (default: $CSV_TO_TABLE_CONFIG "
                             "or ~/.csv-to-table.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser

def _read(path):
    if path == "-":
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", newline="")
        try:
            return stdin.read()
        finally:
            stdin.detach()
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()

def _write(path, table):
    if path is None:
        sys.stdout.write(table)
        return
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(table)

def main(argv=None):
    parser = arguments()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    sep = FORMATS[args.format] if args.separator is None else args.separator
    if not sep:
        logger.info("No separator given, nothing to do")
        return 0

    settings = load_settings(args.config).merge(
        upper_case_header=args.upper_case_header,
        use_markdown=args.use_markdown,
        right_align_numbers=args.right_align_numbers,
        in_place=args.in_place)
    if args.output:
        destination = args.output
    elif settings.in_place:
        if args.file == "-":
            parser.error("--in-place needs an input file")
        destination = args.file
    else:
        destination = None

    try:
        text = _read(args.file)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.file, e)
        return 1

    _write(destination, convert(text, sep, settings))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
