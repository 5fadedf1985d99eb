from dataclasses import dataclass

from models.feature import Feature


@dataclass(frozen=True, slots=True)
class Parsed:
    feature: Feature


@dataclass(frozen=True, slots=True)
class Rejected:
    id: str
    reason: str


ParseResult = Parsed | Rejected
