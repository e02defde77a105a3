import numpy as np
import pyarrow as pa
import pytest
import shapely

from geoarrow import ops
from geoarrow.ops import GeometryBuilder


def test_builder_empty():
    builder = GeometryBuilder()
    assert len(builder) == 0

    array = builder.finish()
    assert len(array) == 0
    assert ops.is_geometry(array.type)
    assert array.type.storage_type == pa.large_binary()


def test_builder_buffers():
    p0 = shapely.Point(0, 1)
    p1 = shapely.Point(2, 3)
    wkb0 = shapely.to_wkb(p0)
    wkb1 = shapely.to_wkb(p1)

    builder = GeometryBuilder(3)
    builder.push(p0)
    builder.null()
    builder.push(p1)
    assert len(builder) == 3
    assert builder.null_count == 1
    assert builder.nbytes == len(wkb0) + len(wkb1)

    array = builder.finish()
    assert len(array) == 3
    assert array.null_count == 1
    assert array.storage.is_valid().to_pylist() == [True, False, True]

    _, offsets, data = array.storage.buffers()
    offsets = np.frombuffer(offsets, dtype=np.int64)[:4]
    np.testing.assert_array_equal(
        offsets, [0, len(wkb0), len(wkb0), len(wkb0) + len(wkb1)]
    )
    assert data.to_pybytes() == wkb0 + wkb1

    assert array.storage.to_pylist() == [wkb0, None, wkb1]


def test_builder_no_nulls_omits_validity():
    builder = GeometryBuilder(1)
    builder.push(shapely.Point(0, 1))
    array = builder.finish()

    validity, _, _ = array.storage.buffers()
    assert validity is None
    assert array.null_count == 0


def test_builder_push_none_is_null():
    builder = GeometryBuilder(2)
    builder.push(None)
    builder.push(shapely.Point(0, 1))
    array = builder.finish()
    assert array.storage.is_valid().to_pylist() == [False, True]


def test_builder_push_wkb():
    wkb = shapely.to_wkb(shapely.Point(0, 1))
    builder = GeometryBuilder(1)
    builder.push_wkb(wkb)
    assert builder.finish().storage.to_pylist() == [wkb]


def test_builder_push_wkb_drops_z():
    builder = GeometryBuilder(1)
    builder.push_wkb(shapely.to_wkb(shapely.Point(0, 1, 2)))
    wkb = builder.finish().storage[0].as_py()

    assert wkb == shapely.to_wkb(shapely.Point(0, 1))
    assert not shapely.from_wkb(wkb).has_z


def test_builder_push_wkb_malformed():
    builder = GeometryBuilder(2)
    builder.push(shapely.Point(0, 1))

    with pytest.raises(ops.DecodeError):
        builder.push_wkb(b"garbage")

    assert len(builder) == 1
    array = builder.finish()
    assert len(array) == 1
    assert array.null_count == 0


def test_builder_grows_past_capacity():
    points = [shapely.Point(i, i) for i in range(5)]

    builder = GeometryBuilder(1)
    for point in points:
        builder.push(point)
    builder.null()

    column = ops.Column("geom", builder.finish())
    assert len(column) == 6
    assert list(column.to_shapely()) == points + [None]


def test_builder_drops_z():
    builder = GeometryBuilder(1)
    builder.push(shapely.Point(0, 1, 2))
    wkb = builder.finish().storage[0].as_py()

    geom = shapely.from_wkb(wkb)
    assert not geom.has_z
    assert geom == shapely.Point(0, 1)


def test_builder_finish_once():
    builder = GeometryBuilder(1)
    builder.push(shapely.Point(0, 1))
    builder.finish()

    with pytest.raises(RuntimeError):
        builder.finish()

    with pytest.raises(RuntimeError):
        builder.push(shapely.Point(0, 1))

    with pytest.raises(RuntimeError):
        builder.null()


def test_builder_push_invalid():
    builder = GeometryBuilder(1)
    with pytest.raises(ops.EncodeError):
        builder.push("POINT (0 1)")


def test_builder_finish_column():
    builder = GeometryBuilder(1)
    builder.push(shapely.Point(0, 1))
    column = builder.finish_column("geom")

    assert column.name == "geom"
    assert column.is_geometry()
