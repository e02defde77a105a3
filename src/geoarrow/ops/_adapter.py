"""Conversion of single values between well-known binary/text and shapely
geometries. Everything here works on exactly one value; the column-level
loops live in :mod:`geoarrow.ops._codec` and :mod:`geoarrow.ops._iterator`.
Output is always two-dimensional: Z and M ordinates are dropped on write.
"""

import shapely
from shapely.errors import ShapelyError

from geoarrow.ops._errors import DecodeError, EncodeError


def decode_wkb(value: bytes) -> shapely.Geometry:
    """Parse one well-known binary value.

    >>> from geoarrow.ops import _adapter
    >>> _adapter.decode_wkb(_adapter.encode_wkb(shapely.Point(0, 1)))
    <POINT (0 1)>
    """
    try:
        return shapely.from_wkb(value)
    except (ShapelyError, TypeError) as e:
        raise DecodeError(f"Could not decode WKB: {e}") from e


def decode_wkt(value: str) -> shapely.Geometry:
    """Parse one well-known text value.

    >>> from geoarrow.ops import _adapter
    >>> _adapter.decode_wkt("POINT (0 1)")
    <POINT (0 1)>
    """
    try:
        return shapely.from_wkt(value)
    except (ShapelyError, TypeError) as e:
        raise DecodeError(f"Could not decode WKT text {value!r}: {e}") from e


def encode_wkb(geom: shapely.Geometry) -> bytes:
    """Write one geometry as two-dimensional well-known binary.

    >>> from geoarrow.ops import _adapter
    >>> len(_adapter.encode_wkb(shapely.Point(0, 1, 2)))
    21
    """
    _check_geometry(geom)
    try:
        return shapely.to_wkb(geom, output_dimension=2)
    except (ShapelyError, TypeError) as e:
        raise EncodeError(f"Could not encode {geom.geom_type} as WKB: {e}") from e


def encode_wkt(geom: shapely.Geometry, precision=None) -> str:
    """Write one geometry as two-dimensional well-known text. ``precision``
    is the number of decimal places to keep; if ``None``, coordinates
    are written at full precision.

    >>> from geoarrow.ops import _adapter
    >>> _adapter.encode_wkt(shapely.Point(0, 1.3333333), precision=2)
    'POINT (0 1.33)'
    """
    _check_geometry(geom)

    rounding_precision = -1 if precision is None else int(precision)
    kwargs = {"output_dimension": 2, "rounding_precision": rounding_precision}

    try:
        return shapely.to_wkt(geom, **kwargs)
    except (ShapelyError, TypeError) as e:
        raise EncodeError(f"Could not encode {geom.geom_type} as WKT: {e}") from e


def _check_geometry(geom):
    if not isinstance(geom, shapely.Geometry):
        raise EncodeError(
            f"Expected shapely.Geometry but got object of type {type(geom).__name__}"
        )
