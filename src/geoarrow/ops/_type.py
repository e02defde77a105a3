from typing import Optional

import pyarrow as pa
import pyarrow_hotfix as _  # noqa: F401
from pyarrow import types as pa_types

from geoarrow import types
from geoarrow.types.type_pyarrow import WkbType, WktType


def geometry() -> WkbType:
    """The logical geometry type produced by this package: well-known
    binary with 64-bit offsets.

    >>> from geoarrow import ops
    >>> ops.geometry()
    WkbType(geoarrow.wkb)
    >>> ops.geometry().storage_type
    DataType(large_binary)
    """
    return types.large_wkb().to_pyarrow()


def is_geometry(type_) -> bool:
    """Check whether ``type_`` is a geometry type that can be iterated
    or operated on (i.e., ``geoarrow.wkb`` with binary or large binary
    storage).

    >>> import pyarrow as pa
    >>> from geoarrow import ops
    >>> ops.is_geometry(ops.geometry())
    True
    >>> ops.is_geometry(pa.large_binary())
    False
    """
    return isinstance(type_, WkbType)


def serialized_encoding(type_) -> Optional[types.Encoding]:
    """Return ``Encoding.WKB`` for binary storage, ``Encoding.WKT`` for
    string storage or ``None`` for anything that can't hold serialized
    geometries. ``geoarrow.wkb`` and ``geoarrow.wkt`` extension types are
    classified by their storage type.
    """
    if isinstance(type_, (WkbType, WktType)):
        type_ = type_.storage_type

    if pa_types.is_binary(type_) or pa_types.is_large_binary(type_):
        return types.Encoding.WKB
    elif pa_types.is_string(type_) or pa_types.is_large_string(type_):
        return types.Encoding.WKT
    else:
        return None


def ensure_storage(obj):
    if not isinstance(obj.type, pa.ExtensionType):
        return obj

    return obj.storage


def offsets_dtype(storage_type):
    if pa_types.is_large_binary(storage_type) or pa_types.is_large_string(
        storage_type
    ):
        return "int64"
    else:
        return "int32"
