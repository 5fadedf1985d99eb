from enum import StrEnum


class GeometryType(StrEnum):
    POINT = 'point'
    VERTEX = 'vertex'
    LINE = 'line'
    AREA = 'area'
    RELATION = 'relation'

    @classmethod
    def from_name(cls, name: str) -> 'GeometryType':
        return cls[name.upper()]
