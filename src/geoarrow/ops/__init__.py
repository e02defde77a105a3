"""
Element-wise geometry operations over nullable GeoArrow columns.

Examples
--------

>>> from geoarrow import ops
"""

from geoarrow.ops._type import geometry, is_geometry

from geoarrow.ops._errors import (
    DecodeError,
    EncodeError,
    UnsupportedOperationError,
)

from geoarrow.ops._column import Column

from geoarrow.ops._builder import GeometryBuilder

from geoarrow.ops._iterator import GeometryIterator

from geoarrow.ops._codec import (
    decode,
    encode,
    as_wkt,
    as_wkb,
    format_wkt,
)

from geoarrow.ops._operation import GeoOperation

from geoarrow.ops._dispatch import (
    dispatch_unary,
    dispatch_binary,
    unary_to_scalar,
    unary_to_geometry,
    binary_to_scalar,
    binary_to_bool,
    binary_to_geometry,
)

try:
    from geoarrow.types.type_pyarrow import register_extension_types

    register_extension_types()
except Exception as e:
    import warnings

    warnings.warn(
        "Failed to register one or more extension types.\n"
        "If this warning appears from pytest, you may have to re-run with --import-mode=importlib.\n"
        "You may also be able to run `unregister_extension_types()` and `register_extension_types()`.\n"
        f"The original error was {e}"
    )
