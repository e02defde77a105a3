import pytest
import shapely

from geoarrow import ops
from geoarrow.ops import _adapter


def test_decode_wkt():
    assert _adapter.decode_wkt("POINT (0 1)") == shapely.Point(0, 1)

    with pytest.raises(ops.DecodeError, match="POINT \\(0 1"):
        _adapter.decode_wkt("POINT (0 1")

    with pytest.raises(ops.DecodeError):
        _adapter.decode_wkt("not valid wkt")


def test_decode_wkb():
    wkb = shapely.to_wkb(shapely.Point(0, 1))
    assert _adapter.decode_wkb(wkb) == shapely.Point(0, 1)

    with pytest.raises(ops.DecodeError):
        _adapter.decode_wkb(wkb[:10])


def test_encode_wkb():
    wkb = _adapter.encode_wkb(shapely.Point(0, 1, 2))
    assert wkb == shapely.to_wkb(shapely.Point(0, 1))
    assert len(wkb) == 21

    with pytest.raises(ops.EncodeError, match="str"):
        _adapter.encode_wkb("POINT (0 1)")

    with pytest.raises(ops.EncodeError):
        _adapter.encode_wkb(None)


def test_encode_wkt():
    assert _adapter.encode_wkt(shapely.Point(0, 1)) == "POINT (0 1)"
    assert _adapter.encode_wkt(shapely.Point(0, 1, 2)) == "POINT (0 1)"
    assert _adapter.encode_wkt(shapely.Point(0, 1.123456), precision=2) == (
        "POINT (0 1.12)"
    )

    with pytest.raises(ops.EncodeError):
        _adapter.encode_wkt(b"\x01")


def test_encode_wkt_full_precision():
    point = shapely.Point(0.123456789, 1234567.891)
    wkt = _adapter.encode_wkt(point)
    assert _adapter.decode_wkt(wkt).equals(point)

    rounded = _adapter.decode_wkt(_adapter.encode_wkt(point, precision=6))
    assert not rounded.equals(point)


def test_decode_error_is_value_error():
    assert issubclass(ops.DecodeError, ValueError)
    assert issubclass(ops.EncodeError, ValueError)
    assert issubclass(ops.UnsupportedOperationError, ValueError)

    err = ops.DecodeError("message", row=3)
    assert err.row == 3
    assert str(err) == "message"
