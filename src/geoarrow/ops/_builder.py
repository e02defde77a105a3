import logging

import numpy as np
import pyarrow as pa

from geoarrow.ops import _adapter
from geoarrow.ops._type import geometry


logger = logging.getLogger(__name__)


class GeometryBuilder:
    """Accumulate geometries into a :func:`geoarrow.ops.geometry` array.

    The builder owns three buffers: a growable byte buffer holding each
    row's well-known binary back to back, int64 offsets (one more than
    the number of rows) and one validity flag per row. Offsets and
    validity are sized from ``capacity``; the byte buffer grows as needed
    because encoded sizes are not known in advance.

    A builder can be finished exactly once.

    >>> import shapely
    >>> from geoarrow.ops import GeometryBuilder
    >>> builder = GeometryBuilder(2)
    >>> builder.push(shapely.Point(0, 1))
    >>> builder.null()
    >>> builder.finish().to_pylist()[1] is None
    True
    """

    def __init__(self, capacity: int = 0) -> None:
        capacity = max(int(capacity), 0)
        self._data = bytearray()
        self._offsets = np.zeros(capacity + 1, dtype=np.int64)
        self._validity = np.zeros(capacity, dtype=np.bool_)
        self._length = 0
        self._null_count = 0
        self._finished = False

    def __len__(self) -> int:
        return self._length

    @property
    def null_count(self) -> int:
        return self._null_count

    @property
    def nbytes(self) -> int:
        return len(self._data)

    def push(self, geom) -> None:
        """Encode ``geom`` as two-dimensional well-known binary and append
        it. ``None`` appends a null.
        """
        if geom is None:
            self.null()
        else:
            self._append_wkb(_adapter.encode_wkb(geom))

    def push_wkb(self, value: bytes) -> None:
        """Append a well-known binary value. The value is parsed and
        rewritten as two-dimensional well-known binary, so malformed input
        raises :class:`geoarrow.ops.DecodeError` here and nothing is appended.
        """
        self._check_not_finished()
        self.push(_adapter.decode_wkb(value))

    def _append_wkb(self, value: bytes) -> None:
        self._check_not_finished()
        self._reserve_row()

        self._data += value
        i = self._length
        self._offsets[i + 1] = self._offsets[i] + len(value)
        self._validity[i] = True
        self._length += 1

    def null(self) -> None:
        self._check_not_finished()
        self._reserve_row()

        i = self._length
        self._offsets[i + 1] = self._offsets[i]
        self._validity[i] = False
        self._length += 1
        self._null_count += 1

    def finish(self) -> pa.ExtensionArray:
        """Wrap the accumulated buffers in a geometry array without copying
        the data buffer. The builder can't be used afterwards.
        """
        self._check_not_finished()
        self._finished = True

        n = self._length
        if self._null_count == 0:
            validity = None
        else:
            validity = pa.py_buffer(
                np.packbits(self._validity[:n], bitorder="little")
            )

        offsets = pa.py_buffer(self._offsets[: (n + 1)])
        data = pa.py_buffer(self._data)

        type_ = geometry()
        storage = pa.Array.from_buffers(
            type_.storage_type,
            n,
            buffers=[validity, offsets, data],
            null_count=self._null_count,
        )

        logger.debug(
            "Finished geometry array with %d rows (%d null, %d bytes)",
            n,
            self._null_count,
            len(self._data),
        )

        return type_.wrap_array(storage)

    def finish_column(self, name):
        from geoarrow.ops._column import Column

        return Column(name, self.finish())

    def _reserve_row(self):
        # Offsets and validity only grow if more rows arrive than the hint
        capacity = len(self._validity)
        if self._length < capacity:
            return

        new_capacity = max(capacity * 2, 1)
        self._validity = np.resize(self._validity, new_capacity)
        self._offsets = np.resize(self._offsets, new_capacity + 1)

    def _check_not_finished(self):
        if self._finished:
            raise RuntimeError("GeometryBuilder can't be used after finish()")
