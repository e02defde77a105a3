"""Element-wise execution of :class:`geoarrow.ops.GeoOperation` over
geometry columns.

Every operation runs through one of a small number of templates that
walk the input column(s) with :class:`geoarrow.ops.GeometryIterator`,
propagate nulls, and collect results either as a primitive pyarrow array
or through a :class:`geoarrow.ops.GeometryBuilder`. The computation on
each pair of values is delegated to shapely.
"""

import logging
from functools import partial
from typing import Callable, Optional

import pyarrow as pa
import shapely

from geoarrow.ops._builder import GeometryBuilder
from geoarrow.ops._codec import ensure_geometry
from geoarrow.ops._column import Column
from geoarrow.ops._errors import UnsupportedOperationError
from geoarrow.ops._iterator import GeometryIterator
from geoarrow.ops._operation import GeoOperation


logger = logging.getLogger(__name__)


def unary_to_scalar(
    column, op_fn: Callable[[shapely.Geometry], object], type_=None
) -> Column:
    """Apply ``op_fn`` to every non-null geometry and collect the results
    as an array of ``type_`` (double by default).

    >>> from geoarrow import ops
    >>> geoms = ops.decode(["LINESTRING (0 0, 3 4)", None])
    >>> ops.unary_to_scalar(geoms, lambda geom: geom.length).to_pylist()
    [5.0, None]
    """
    column = ensure_geometry(column)
    if type_ is None:
        type_ = pa.float64()

    values = [
        None if geom is None else op_fn(geom) for geom in GeometryIterator(column)
    ]
    return Column(column.name, pa.array(values, type=type_))


def unary_to_geometry(
    column, op_fn: Callable[[shapely.Geometry], Optional[shapely.Geometry]]
) -> Column:
    column = ensure_geometry(column)
    builder = GeometryBuilder(len(column))
    for geom in GeometryIterator(column):
        if geom is None:
            builder.null()
        else:
            builder.push(op_fn(geom))

    return builder.finish_column(column.name)


def binary_to_scalar(
    lhs, rhs, op_fn: Callable[[shapely.Geometry, shapely.Geometry], object], type_=None
) -> Column:
    """Apply ``op_fn`` to every pair of non-null geometries and collect
    the results as an array of ``type_`` (double by default). The result
    is null wherever either side is null and takes the name of ``lhs``.
    """
    lhs, rhs = _ensure_geometry_pair(lhs, rhs)
    if type_ is None:
        type_ = pa.float64()

    values = [
        None if (l_geom is None or r_geom is None) else op_fn(l_geom, r_geom)
        for l_geom, r_geom in zip(GeometryIterator(lhs), GeometryIterator(rhs))
    ]
    return Column(lhs.name, pa.array(values, type=type_))


def binary_to_bool(
    lhs, rhs, op_fn: Callable[[shapely.Geometry, shapely.Geometry], bool]
) -> Column:
    return binary_to_scalar(lhs, rhs, op_fn, type_=pa.bool_())


def binary_to_geometry(
    lhs,
    rhs,
    op_fn: Callable[[shapely.Geometry, shapely.Geometry], Optional[shapely.Geometry]],
) -> Column:
    """Apply ``op_fn`` to every pair of non-null geometries and collect the
    results as a geometry column. ``op_fn`` may return ``None`` for pairs it
    has no result for, which results in a null for that row.
    """
    lhs, rhs = _ensure_geometry_pair(lhs, rhs)
    builder = GeometryBuilder(len(lhs))
    for l_geom, r_geom in zip(GeometryIterator(lhs), GeometryIterator(rhs)):
        if l_geom is None or r_geom is None:
            builder.null()
        else:
            builder.push(op_fn(l_geom, r_geom))

    return builder.finish_column(lhs.name)


def dispatch_unary(column, op) -> Column:
    """Run a one-column :class:`geoarrow.ops.GeoOperation` element-wise.

    >>> from geoarrow import ops
    >>> geoms = ops.decode(["POLYGON ((0 0, 2 0, 2 2, 0 2, 0 0))", None])
    >>> ops.dispatch_unary(geoms, ops.GeoOperation.AREA).to_pylist()
    [4.0, None]
    >>> ops.dispatch_unary(geoms, "distance")
    Traceback (most recent call last):
      ...
    geoarrow.ops._errors.UnsupportedOperationError: Unsupported unary operation DISTANCE
    """
    op = GeoOperation.create(op)
    template = _template_for(_UNARY_TEMPLATES, op, "unary")
    logger.debug("Dispatching %s over column '%s'", op.name, getattr(column, "name", ""))
    return template(column)


def dispatch_binary(lhs, rhs, op) -> Column:
    """Run a two-column :class:`geoarrow.ops.GeoOperation` element-wise.
    The result takes the name of ``lhs``.

    >>> from geoarrow import ops
    >>> lhs = ops.decode(["POINT (0 0)", "POINT (0 0)", None])
    >>> rhs = ops.decode(["POINT (3 4)", None, "POINT (1 1)"])
    >>> ops.dispatch_binary(lhs, rhs, ops.GeoOperation.DISTANCE).to_pylist()
    [5.0, None, None]
    """
    op = GeoOperation.create(op)
    template = _template_for(_BINARY_TEMPLATES, op, "binary")
    logger.debug(
        "Dispatching %s over columns '%s' and '%s'",
        op.name,
        getattr(lhs, "name", ""),
        getattr(rhs, "name", ""),
    )
    return template(lhs, rhs)


def _area(geom):
    # GEOS area is unsigned regardless of ring orientation
    return geom.area


def _convex_hull(geom):
    return geom.convex_hull


def _distance(lhs, rhs):
    return lhs.distance(rhs)


def _intersects(lhs, rhs):
    return lhs.intersects(rhs)


def _contains(lhs, rhs):
    return lhs.contains(rhs)


def _intersection(lhs, rhs):
    if lhs.geom_type != rhs.geom_type:
        return None
    elif lhs.geom_type not in ("Polygon", "MultiPolygon"):
        return None
    else:
        return lhs.intersection(rhs)


_UNARY_TEMPLATES = {
    GeoOperation.AREA: partial(unary_to_scalar, op_fn=_area),
    GeoOperation.CONVEX_HULL: partial(unary_to_geometry, op_fn=_convex_hull),
}

_BINARY_TEMPLATES = {
    GeoOperation.DISTANCE: partial(binary_to_scalar, op_fn=_distance),
    GeoOperation.INTERSECTS: partial(binary_to_bool, op_fn=_intersects),
    GeoOperation.CONTAINS: partial(binary_to_bool, op_fn=_contains),
    GeoOperation.INTERSECTION: partial(binary_to_geometry, op_fn=_intersection),
}


def _template_for(templates, op, arity_name):
    try:
        return templates[op]
    except KeyError:
        raise UnsupportedOperationError(
            f"Unsupported {arity_name} operation {op.name}", operation=op
        ) from None


def _ensure_geometry_pair(lhs, rhs):
    lhs = ensure_geometry(lhs)
    rhs = ensure_geometry(rhs)
    if len(lhs) != len(rhs):
        raise ValueError(
            f"Expected columns of equal length but got {len(lhs)} and {len(rhs)}"
        )

    return lhs, rhs
