r"""Render ``Record``s as fixed-width ASCII or Markdown tables.

Every line ends with ``\r\n``; ``show`` prints the lines plainly:
>>> from parse import parse
>>> def show(table): print("\n".join(table.splitlines()))
>>> people = parse("Name,Age\nBob,21\nAlice,3")

Rows are boxed in by border rows:
>>> show(render(people))  # doctest: -NORMALIZE_WHITESPACE
|-------|-----|
| Name  | Age |
|-------|-----|
| Bob   | 21  |
|-------|-----|
| Alice | 3   |
|-------|-----|

Markdown only puts a border under the header:
>>> show(render(people, use_markdown=True))  # doctest: -NORMALIZE_WHITESPACE
| Name  | Age |
|-------|-----|
| Bob   | 21  |
| Alice | 3   |

The header can be uppercased, and numbers pushed to the right:
>>> show(render(people, upper_case_header=True,
...                     right_align_numbers=True))  # doctest: -NORMALIZE_WHITESPACE
|-------|-----|
| NAME  | AGE |
|-------|-----|
| Bob   |  21 |
|-------|-----|
| Alice |   3 |
|-------|-----|

Widths are measured before uppercasing, so a header that grows pushes its
border out:
>>> show(render(parse("straße,x\n1,2"), upper_case_header=True))  # doctest: -NORMALIZE_WHITESPACE
|--------|---|
| STRASSE | X |
|--------|---|
| 1      | 2 |
|--------|---|

Empty values are never numbers:
>>> show(render(parse("2022,Name,Value\n,,"),
...             right_align_numbers=True))  # doctest: -NORMALIZE_WHITESPACE
|------|------|-------|
| 2022 | Name | Value |
|------|------|-------|
|      |      |       |
|------|------|-------|

Short records only get the cells they have:
>>> show(render(parse("a,bb,c\nd")))  # doctest: -NORMALIZE_WHITESPACE
|---|----|---|
| a | bb | c |
|---|----|---|
| d |
|---|----|---|

Records without columns are left out:
>>> render([Record.new()] + people, use_markdown=True) == render(people, use_markdown=True)
True

Rendering the same records twice gives the same text:
>>> render(people, right_align_numbers=True) == render(people, right_align_numbers=True)
True
"""
import logging

from records import Column, Record

logger = logging.getLogger(__name__)

BORDER = "|"
NUMERIC = frozenset("0123456789+-,.")

def is_numeric(value):
    """Whether ``value`` looks like a number. Only the characters count.

    >>> is_numeric("1,234.5"), is_numeric("-3"), is_numeric("--")
    (True, True, True)
    >>> is_numeric(""), is_numeric("1e3"), is_numeric(" 1")
    (False, False, False)
    """
    return bool(value) and all(c in NUMERIC for c in value)

def column_widths(records):
    """The longest value in each column.

    >>> column_widths([Record([Column("a"), Column("bbb")]), Record([Column("cc")])])
    [2, 3]
    >>> column_widths([])
    []
    """
    widths = []
    for record in records:
        for i, column in enumerate(record.columns):
            if i == len(widths):
                widths.append(len(column.value))
            else:
                widths[i] = max(widths[i], len(column.value))
    return widths

def separator_row(widths):
    return Record([Column("-" * (width + 2)) for width in widths])

def format_row(record, widths, padding=" ", upper=False, right_align_numbers=False):
    """Lay out one record, sharing borders between neighbouring cells.

    >>> format_row(Record([Column("a"), Column("1")]), [3, 2], right_align_numbers=True)
    '| a   |  1 |'
    >>> format_row(separator_row([3, 2]), [3, 2], padding="")
    '|-----|----|'
    """
    cells = []
    for column, width in zip(record.columns, widths):
        value = column.value.upper() if upper else column.value
        # Widths come from the stored values, not the uppercased ones.
        gap = " " * (width - len(column.value))
        if right_align_numbers and is_numeric(value):
            cells.append(padding + gap + value + padding)
        else:
            cells.append(padding + value + gap + padding)
    if not cells:
        return ""
    return BORDER + BORDER.join(cells) + BORDER

def render(records, upper_case_header=False, use_markdown=False, right_align_numbers=False):
    widths = column_widths(records)
    logger.debug("Rendering %d record(s) with column widths %s", len(records), widths)
    separator = format_row(separator_row(widths), widths, padding="")

    lines = []
    for i, record in enumerate(records):
        if not record.columns:
            continue
        row = format_row(record, widths,
                         upper=upper_case_header and i == 0,
                         right_align_numbers=right_align_numbers)
        if use_markdown:
            lines.append(row)
            if len(lines) == 1:
                lines.append(separator)
        else:
            lines.extend([separator, row])
    if not use_markdown:
        lines.append(separator)

    return "".join(line + "\r\n" for line in lines)

if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS |
                                doctest.NORMALIZE_WHITESPACE |
                                doctest.REPORT_NDIFF)
