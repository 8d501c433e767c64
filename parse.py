r'''Parse delimiter-separated text into ``Record``s.

Records are separator-delimited columns:
>>> values(parse("1,2,3"))
[['1', '2', '3']]

Any single character separates columns:
>>> values(parse("a\tb\nc\td", "\t"))
[['a', 'b'], ['c', 'd']]

Quoted columns may hold doubled quotes, separators and newlines:
>>> values(parse('1,"This is a ""quoted"" word",3'))
[['1', 'This is a "quoted" word', '3']]
>>> values(parse('1,"This is a """"quoted"""""" word",3'))
[['1', 'This is a ""quoted""" word', '3']]
>>> values(parse('1,"hello world","with a, comma"'))
[['1', 'hello world', 'with a, comma']]
>>> values(parse('"first\r\ncolumn",second column'))
[['first\r\ncolumn', 'second column']]

Either newline style ends a record:
>>> values(parse('a,b\r\nc,"quoted"'))
[['a', 'b'], ['c', 'quoted']]
>>> values(parse("a,b\nc,d\n"))
[['a', 'b'], ['c', 'd']]

Blank lines between records are skipped:
>>> values(parse("a\r\n\r\nb"))
[['a'], ['b']]

Empty columns are kept wherever a separator leaves one:
>>> values(parse("1,"))
[['1', '']]
>>> values(parse(",2"))
[['', '2']]
>>> values(parse("1,,3"))
[['1', '', '3']]
>>> values(parse("a\r\n,b"))
[['a'], ['', 'b']]

There is always at least one record with at least one column:
>>> values(parse(""))
[['']]
>>> values(parse("\n"))
[['']]
>>> values(parse("1"))
[['1']]

Spaces (but not tabs) before a quote are dropped:
>>> values(parse('a,  "b, c" ,d'))
[['a', 'b, c', 'd']]
>>> values(parse('a,\t"b"'))
[['a', '\t"b"']]
>>> values(parse("a,  b"))
[['a', '  b']]

Anything between a closing quote and the next separator is discarded:
>>> values(parse('"abc"def,g'))
[['abc', 'g']]

An unterminated quote runs to the end of the input:
>>> values(parse('a,"bc'))
[['a', 'bc\r\n']]

Quoting any value gives the value back:
>>> quote = lambda v: '"' + v.replace('"', '""') + '"'
>>> samples = ['plain', 'with, comma', 'say "hi"', 'two\r\nlines', '']
>>> values(parse(",".join(quote(s) for s in samples))) == [samples]
True

Parsers for the usual separators are prebuilt:
>>> psv.parse_strict("a|b\r\n")
[Record(columns=[Column(value='a'), Column(value='b')])]
'''
from functools import lru_cache
import logging

import parsec as P

from records import Column, Record, values

logger = logging.getLogger(__name__)

QUOTE = '"'
NEWLINES = "\r\n"

def normalize(text):
    r"""End the text with a newline, so the last column ends like any other.

    >>> normalize("a,b")
    'a,b\r\n'
    >>> normalize("a,b\n")
    'a,b\n'
    >>> normalize("")
    '\r\n'
    """
    if not text or text[-1] not in NEWLINES:
        text += "\r\n"
    return text

def skip_to_quote(text, index):
    r"""Move onto a quote that only spaces precede, otherwise stay put.

    >>> skip_to_quote('  "x"', 0).index
    2
    >>> skip_to_quote('  x', 0).index
    0
    >>> skip_to_quote('\t"x"', 0).index
    0
    """
    i = index
    while i < len(text) and text[i] == " ":
        i += 1
    if i < len(text) and text[i] == QUOTE:
        index = i
    return P.Value.success(index, None)

quote_lookahead = P.Parser(skip_to_quote)

def column(separator):
    r"""Read one column's value, stopping before whatever ends it.

    Returns the value and whether a newline ended it. A quoted column stops
    on its closing quote:
    >>> r = column(",")('"a""b",c', 0)
    >>> r.index, r.value
    (5, ('a"b', False))
    >>> r = column(",")("ab\r\n", 0)
    >>> r.index, r.value
    (2, ('ab', True))
    """
    @P.Parser
    def column_(text, index):
        start = index
        quoted = False
        terminated = False
        value = []
        while index < len(text):
            char = text[index]
            if index == start and char == QUOTE:
                quoted = True
            elif quoted and char == QUOTE:
                if text[index + 1:index + 2] != QUOTE:
                    break
                value.append(QUOTE)
                index += 1
            elif not quoted and (char == separator or char in NEWLINES):
                terminated = char in NEWLINES
                break
            else:
                value.append(char)
            index += 1
        return P.Value.success(index, ("".join(value), terminated))
    return column_

def control(separator):
    r"""Skip the separators and newlines after a column.

    Returns whether a newline was skipped. A lone separator is skipped on
    its own:
    >>> r = control(",")(",,b", 0)
    >>> r.index, r.value
    (1, False)

    Leftovers of a quoted column go up to the first separator:
    >>> r = control(",")('"x,b', 0)
    >>> r.index, r.value
    (3, False)

    A separator after a newline starts an empty column:
    >>> r = control(",")("\r\n\n,b", 0)
    >>> r.index, r.value
    (3, True)
    """
    @P.Parser
    def control_(text, index):
        if text[index:index + 1] == separator:
            return P.Value.success(index + 1, False)
        terminated = seen = False
        while index < len(text):
            char = text[index]
            if char == separator or char in NEWLINES:
                if seen and char == separator:
                    break
                terminated = terminated or char in NEWLINES
                seen = True
            elif seen:
                break
            index += 1
        return P.Value.success(index, terminated)
    return control_

@P.Parser
def more(text, index):
    """Succeed, consuming nothing, unless at the end of the input."""
    if index < len(text):
        return P.Value.success(index, None)
    return P.Value.failure(index, "a column")

def field(separator):
    r"""A ``Column`` and whether it is the last of its record.

    >>> field(",").parse_partial('"a" ,b')
    ((Column(value='a'), False), 'b')
    >>> field(",").parse_partial("a\r\nb")
    ((Column(value='a'), True), 'b')
    """
    column_, control_ = column(separator), control(separator)

    @P.generate
    def field_():
        yield more
        yield quote_lookahead
        value, terminated = yield column_
        ended = yield control_
        return Column(value), terminated or ended
    return field_

def _records(fields):
    """Group ``(Column, terminated)`` pairs into ``Record``s."""
    records = [Record.new()]
    for i, (column_, terminated) in enumerate(fields):
        records[-1].append(column_)
        if terminated and i + 1 < len(fields):
            records.append(Record.new())
    return records

@lru_cache(maxsize=None)
def records(separator):
    """A parser for a whole (normalized) document."""
    return P.many(field(separator)).parsecmap(_records)

csv = records(",")
tsv = records("\t")
psv = records("|")
ssv = records(";")

def parse(text, separator=","):
    """Parse ``text`` into ``Record``s of ``Column``s.

    >>> parse("a;b", ";")
    [Record(columns=[Column(value='a'), Column(value='b')])]
    >>> parse("a", ",,")
    Traceback (most recent call last):
        ...
    ValueError: separator must be a single character, got ',,'
    """
    if len(separator) != 1:
        raise ValueError("separator must be a single character, got {!r}".format(separator))
    result = records(separator).parse_strict(normalize(text))
    logger.debug("Parsed %d record(s) separated by %r", len(result), separator)
    return result

if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS |
                                doctest.NORMALIZE_WHITESPACE |
                                doctest.REPORT_NDIFF)
