from dataclasses import dataclass
from typing import Iterable, Optional, Union

import numpy as np
import pyarrow as pa
import shapely
from numpy.typing import NDArray

from geoarrow.ops._builder import GeometryBuilder
from geoarrow.ops._type import is_geometry


@dataclass
class Column:
    """A named array, the unit every codec and dispatch function consumes
    and returns. Chunked arrays are combined into a single array on
    construction.

    >>> import pyarrow as pa
    >>> from geoarrow.ops import Column
    >>> col = Column("geom", pa.array(["POINT (0 1)", None]))
    >>> len(col), col.null_count
    (2, 1)
    """

    name: str
    array: Union[pa.Array, pa.ChunkedArray]

    def __post_init__(self):
        self.name = str(self.name)

        if isinstance(self.array, pa.ChunkedArray):
            self.array = _combine_chunks(self.array)
        elif not isinstance(self.array, pa.Array):
            self.array = pa.array(self.array)

    @classmethod
    def from_shapely(
        cls, geoms: Iterable[Optional[shapely.Geometry]], name: str = "geometry"
    ) -> "Column":
        """Build a geometry column from shapely geometries (``None`` for
        null rows).

        >>> import shapely
        >>> from geoarrow.ops import Column
        >>> Column.from_shapely([shapely.Point(0, 1), None]).null_count
        1
        """
        geoms = list(geoms)
        builder = GeometryBuilder(len(geoms))
        for geom in geoms:
            builder.push(geom)
        return builder.finish_column(name)

    @property
    def type(self) -> pa.DataType:
        return self.array.type

    @property
    def field(self) -> pa.Field:
        return pa.field(self.name, self.array.type)

    @property
    def storage(self) -> pa.Array:
        if isinstance(self.array.type, pa.ExtensionType):
            return self.array.storage
        else:
            return self.array

    @property
    def null_count(self) -> int:
        return self.array.null_count

    def __len__(self) -> int:
        return len(self.array)

    def is_geometry(self) -> bool:
        return is_geometry(self.array.type)

    def slice(self, offset=0, length=None) -> "Column":
        return Column(self.name, self.array.slice(offset, length))

    def to_pylist(self) -> list:
        return self.array.to_pylist()

    def to_shapely(self) -> NDArray[np.object_]:
        """Convert a geometry column to an array of shapely geometries"""
        from geoarrow.ops._iterator import GeometryIterator

        out = np.empty(len(self), dtype=np.object_)
        for i, geom in enumerate(GeometryIterator(self)):
            out[i] = geom
        return out

    def __repr__(self):
        n_values_to_show = 10
        max_width = 70

        if len(self) > n_values_to_show:
            n_extra = len(self) - n_values_to_show
            value_s = "values" if n_extra != 1 else "value"
            head = self.slice(0, int(n_values_to_show / 2))
            mid = f"...{n_extra} {value_s}..."
            tail = self.slice(len(self) - int(n_values_to_show / 2))
        else:
            head = self
            mid = ""
            tail = self.slice(0, 0)

        header = f"{type(self).__name__}<{self.name}: {self.type}>[{len(self)}]"

        if self.is_geometry():
            from geoarrow.ops._codec import format_wkt

            try:
                head_items = format_wkt(head, max_element_size_bytes=max_width)
                tail_items = format_wkt(tail, max_element_size_bytes=max_width)
            except Exception as e:
                err = f"* 1 or more display values failed to parse\n* {str(e)}"
                return f"{header}\n{err}"

            head_str = [_format_item(item, max_width) for item in head_items.to_pylist()]
            tail_str = [_format_item(item, max_width) for item in tail_items.to_pylist()]
        else:
            head_str = [_format_item(item, max_width) for item in head.to_pylist()]
            tail_str = [_format_item(item, max_width) for item in tail.to_pylist()]

        head_str = "\n".join(head_str)
        tail_str = "\n".join(tail_str)
        items_str = f"{head_str}\n{mid}\n{tail_str}"

        return f"{header}\n{items_str}".strip()


def _format_item(item, max_width):
    if item is None:
        return "null"

    item_str = f"<{item}>"
    if len(item_str) > max_width:
        item_str = f"{item_str[:(max_width - 4)]}...>"
    return item_str


def _combine_chunks(chunked):
    if isinstance(chunked.type, pa.ExtensionType):
        storage = pa.chunked_array(
            [chunk.storage for chunk in chunked.chunks],
            type=chunked.type.storage_type,
        )
        return chunked.type.wrap_array(storage.combine_chunks())
    else:
        return chunked.combine_chunks()
