import pytest

from geoarrow import ops
from geoarrow.ops import GeoOperation


def test_operation_arity():
    assert GeoOperation.AREA.arity == 1
    assert GeoOperation.CONVEX_HULL.arity == 1
    assert GeoOperation.DISTANCE.arity == 2
    assert GeoOperation.INTERSECTS.arity == 2
    assert GeoOperation.INTERSECTION.arity == 2
    assert GeoOperation.CONTAINS.arity == 2


def test_operation_members():
    assert [op.name for op in GeoOperation] == [
        "AREA",
        "CONVEX_HULL",
        "DISTANCE",
        "INTERSECTS",
        "INTERSECTION",
        "CONTAINS",
    ]

    # Members are hashable and can key routing tables
    assert len({op: None for op in GeoOperation}) == 6


def test_operation_create():
    assert GeoOperation.create(GeoOperation.AREA) is GeoOperation.AREA
    assert GeoOperation.create("area") is GeoOperation.AREA
    assert GeoOperation.create("Convex_Hull") is GeoOperation.CONVEX_HULL

    with pytest.raises(ops.UnsupportedOperationError, match="'buffer'") as excinfo:
        GeoOperation.create("buffer")
    assert excinfo.value.operation == "buffer"

    with pytest.raises(ops.UnsupportedOperationError, match="int"):
        GeoOperation.create(1)
