from enum import Enum

from geoarrow.ops._errors import UnsupportedOperationError


class GeoOperation(Enum):
    """Constants for the element-wise operations that can be dispatched
    over geometry columns. The set is closed: callers may match on it
    exhaustively.

    Examples
    --------

    >>> from geoarrow import ops
    >>> ops.GeoOperation.AREA
    <GeoOperation.AREA: 1>
    >>> ops.GeoOperation.DISTANCE.arity
    2
    """

    AREA = 1
    """Unsigned planar area of one geometry"""

    CONVEX_HULL = 2
    """Convex hull of one geometry"""

    DISTANCE = 3
    """Planar Euclidean distance between two geometries"""

    INTERSECTS = 4
    """Whether two geometries intersect"""

    INTERSECTION = 5
    """Intersection of two polygons or two multipolygons"""

    CONTAINS = 6
    """Whether the first geometry contains the second"""

    @property
    def arity(self) -> int:
        if self in (GeoOperation.AREA, GeoOperation.CONVEX_HULL):
            return 1
        else:
            return 2

    @classmethod
    def create(cls, obj):
        """Create a GeoOperation from a member or a (case-insensitive) name

        >>> from geoarrow import ops
        >>> ops.GeoOperation.create("convex_hull")
        <GeoOperation.CONVEX_HULL: 2>
        """
        if isinstance(obj, cls):
            return obj
        elif isinstance(obj, str):
            try:
                return cls[obj.upper()]
            except KeyError:
                raise UnsupportedOperationError(
                    f"Unsupported operation '{obj}'", operation=obj
                ) from None
        else:
            raise UnsupportedOperationError(
                f"Can't create {cls.__name__} from object of type {type(obj).__name__}",
                operation=obj,
            )
