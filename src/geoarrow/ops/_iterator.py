from typing import Iterator, Optional

import numpy as np
import shapely

from geoarrow.ops import _adapter
from geoarrow.ops._errors import DecodeError
from geoarrow.ops._type import is_geometry, offsets_dtype


class GeometryIterator(Iterator[Optional[shapely.Geometry]]):
    """Lazily decode the rows of a geometry column, yielding ``None`` for
    null rows. Values are read directly from the validity, offsets and
    data buffers and decoded one at a time as the iterator advances.

    The iterator is single pass: once exhausted it stays exhausted and a
    new iterator is needed to scan the column again. It holds a view of
    the column's buffers and does not copy them.

    >>> from geoarrow.ops import GeometryIterator, decode, Column
    >>> col = decode(Column("geom", ["POINT (0 1)", None]))
    >>> list(GeometryIterator(col))
    [<POINT (0 1)>, None]
    """

    def __init__(self, column) -> None:
        from geoarrow.ops._column import Column

        if isinstance(column, Column):
            array = column.array
        else:
            array = Column("", column).array

        if not is_geometry(array.type):
            raise TypeError(f"Expected geometry array but got array of type {array.type}")

        storage = array.storage
        validity, offsets, data = storage.buffers()

        self._length = len(storage)
        self._cursor = 0

        if validity is None or storage.null_count == 0:
            self._validity = None
        else:
            self._validity = np.unpackbits(
                np.frombuffer(validity, dtype=np.uint8),
                bitorder="little",
            )[storage.offset : (storage.offset + self._length)]

        self._offsets = np.frombuffer(offsets, dtype=offsets_dtype(storage.type))[
            storage.offset : (storage.offset + self._length + 1)
        ]
        self._data = memoryview(data) if data is not None else memoryview(b"")

    def __iter__(self):
        return self

    def __next__(self) -> Optional[shapely.Geometry]:
        if self._cursor >= self._length:
            raise StopIteration

        i = self._cursor
        self._cursor += 1

        if self._validity is not None and not self._validity[i]:
            return None

        start = int(self._offsets[i])
        end = int(self._offsets[i + 1])
        try:
            return _adapter.decode_wkb(bytes(self._data[start:end]))
        except DecodeError as e:
            raise DecodeError(f"Row {i}: {e}", row=i) from e
