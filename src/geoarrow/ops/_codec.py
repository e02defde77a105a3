import logging

import pyarrow as pa

from geoarrow import types
from geoarrow.ops import _adapter
from geoarrow.ops._builder import GeometryBuilder
from geoarrow.ops._column import Column
from geoarrow.ops._errors import DecodeError
from geoarrow.ops._iterator import GeometryIterator
from geoarrow.ops._type import ensure_storage, serialized_encoding


logger = logging.getLogger(__name__)


def obj_as_column(obj, name="geometry") -> Column:
    if isinstance(obj, Column):
        return obj
    else:
        return Column(name, obj)


def decode(column, raise_on_failure=False) -> Column:
    """Parse a column of well-known binary (binary or large binary) or
    well-known text (string or large string) into a geometry column.
    Null values stay null. Values that fail to parse become null unless
    ``raise_on_failure`` is ``True``, in which case the first failure
    aborts the whole call with :class:`geoarrow.ops.DecodeError`.

    >>> from geoarrow import ops
    >>> ops.decode(["POINT (0 1)", "POINT (0 1"]).to_shapely()
    array([<POINT (0 1)>, None], dtype=object)
    >>> ops.decode(["POINT (0 1"], raise_on_failure=True)
    Traceback (most recent call last):
      ...
    geoarrow.ops._errors.DecodeError: Row 0: Could not decode WKT text 'POINT (0 1': ...
    """
    column = obj_as_column(column)
    encoding = serialized_encoding(column.type)

    if encoding == types.Encoding.WKB:
        decode_value = _adapter.decode_wkb
    elif encoding == types.Encoding.WKT:
        decode_value = _adapter.decode_wkt
    else:
        raise TypeError(
            f"Can only decode binary or string arrays but got array of type {column.type}"
        )

    storage = ensure_storage(column.array)
    builder = GeometryBuilder(len(storage))
    n_failed = 0

    for i, value in enumerate(storage.to_pylist()):
        if value is None:
            builder.null()
            continue

        try:
            geom = decode_value(value)
        except DecodeError as e:
            if raise_on_failure:
                raise DecodeError(f"Row {i}: {e}", row=i) from e

            n_failed += 1
            builder.null()
            continue

        builder.push(geom)

    logger.debug(
        "Decoded %d rows of %s from column '%s' (%d failed and set to null)",
        len(builder),
        encoding.name,
        column.name,
        n_failed,
    )

    return builder.finish_column(column.name)


def encode(column, as_text=False, precision=None) -> Column:
    """Write a geometry column as well-known text (large string) if
    ``as_text`` is ``True`` or well-known binary (large binary) otherwise.
    Null values stay null; any value that fails to encode fails the whole
    call with :class:`geoarrow.ops.EncodeError`.

    >>> from geoarrow import ops
    >>> geoms = ops.decode(["POINT (0 1)", None])
    >>> ops.encode(geoms, as_text=True).to_pylist()
    ['POINT (0 1)', None]
    """
    column = ensure_geometry(column)

    if as_text:
        values = [
            None if geom is None else _adapter.encode_wkt(geom, precision)
            for geom in GeometryIterator(column)
        ]
        type_ = pa.large_utf8()
    else:
        values = [
            None if geom is None else _adapter.encode_wkb(geom)
            for geom in GeometryIterator(column)
        ]
        type_ = pa.large_binary()

    logger.debug(
        "Encoded %d rows from column '%s' as %s",
        len(values),
        column.name,
        "WKT" if as_text else "WKB",
    )

    return Column(column.name, pa.array(values, type=type_))


def as_wkt(column, precision=None) -> Column:
    """Encode ``column`` as well-known text.

    >>> from geoarrow import ops
    >>> ops.as_wkt(ops.decode(["POINT (0 1.3333333)"]), precision=3).to_pylist()
    ['POINT (0 1.333)']
    """
    return encode(column, as_text=True, precision=precision)


def as_wkb(column) -> Column:
    """Encode ``column`` as well-known binary."""
    return encode(column, as_text=False)


def format_wkt(column, precision=None, max_element_size_bytes=None) -> Column:
    """Format geometries in a column as well-known text with an optional cap
    on digits and element size to prevent excessive output for large features.

    >>> from geoarrow import ops
    >>> ops.format_wkt(ops.decode(["POINT (0 1)"]), max_element_size_bytes=3).to_pylist()
    ['POI']
    """
    formatted = as_wkt(column, precision=precision)
    if max_element_size_bytes is None:
        return formatted

    max_element_size_bytes = int(max_element_size_bytes)
    values = [
        None if item is None else item[:max_element_size_bytes]
        for item in formatted.to_pylist()
    ]
    return Column(formatted.name, pa.array(values, type=formatted.type))


def ensure_geometry(column) -> Column:
    column = obj_as_column(column)
    if not column.is_geometry():
        raise TypeError(
            f"Expected geometry column but got column '{column.name}' of type {column.type}"
        )

    return column
