r"""Records and columns produced by ``parse``.

A ``Column`` holds one cell's value and never changes:
>>> Column("Bob")
Column(value='Bob')

A ``Record`` is an ordered row of columns, only ever appended to:
>>> record = Record.new()
>>> record.append(Column("Bob"))
>>> record.append(Column("21"))
>>> record
Record(columns=[Column(value='Bob'), Column(value='21')])
>>> record.values
['Bob', '21']
"""
from collections import namedtuple

Column = namedtuple("Column", "value")

class Record(namedtuple("Record", "columns")):
    __slots__ = ()

    @classmethod
    def new(cls):
        return cls([])

    def append(self, column):
        self.columns.append(column)

    @property
    def values(self):
        return [c.value for c in self.columns]

def values(records):
    """Plain nested lists of strings, handy for comparisons."""
    return [r.values for r in records]

if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS |
                                doctest.NORMALIZE_WHITESPACE |
                                doctest.REPORT_NDIFF)
