from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from models.geometry_type import GeometryType


def _frozen_map(value: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(value))


def any_key_or_value_contains_wildcard(tags: Mapping[str, str]) -> bool:
    return any('*' in k or '*' in v for k, v in tags.items())


@dataclass(frozen=True, slots=True, kw_only=True)
class Feature:
    """
    A single preset from the iD tagging schema.

    Collections are copied on construction and exposed read-only.
    `add_tags` and `remove_tags` may be passed as None to fall back
    (tags -> add_tags -> remove_tags); after construction they are always set.

    Raises ValueError when tags are empty or contain a wildcard,
    or when a country code is not 2 uppercase characters.
    """

    id: str
    tags: Mapping[str, str]
    geometry: tuple[GeometryType, ...]
    name: str
    icon: str = ''
    image_url: str = ''
    terms: tuple[str, ...] = ()
    include_country_codes: tuple[str, ...] = ()
    exclude_country_codes: tuple[str, ...] = ()
    searchable: bool = True
    match_score: float = 1.0
    suggestion: bool = False
    add_tags: Mapping[str, str] | None = None
    remove_tags: Mapping[str, str] | None = None

    def __post_init__(self):
        if not self.tags:
            raise ValueError(f'Feature {self.id!r} must have tags')
        if any_key_or_value_contains_wildcard(self.tags):
            raise ValueError(f'Feature {self.id!r} must not have wildcard tags')
        for code in (*self.include_country_codes, *self.exclude_country_codes):
            if len(code) != 2 or code != code.upper():
                raise ValueError(f'Feature {self.id!r} has invalid country code {code!r}')

        tags = _frozen_map(self.tags)
        add_tags = tags if self.add_tags is None else _frozen_map(self.add_tags)
        remove_tags = add_tags if self.remove_tags is None else _frozen_map(self.remove_tags)

        # frozen dataclass, assign through object
        object.__setattr__(self, 'tags', tags)
        object.__setattr__(self, 'add_tags', add_tags)
        object.__setattr__(self, 'remove_tags', remove_tags)
        object.__setattr__(self, 'geometry', tuple(self.geometry))
        object.__setattr__(self, 'terms', tuple(self.terms))
        object.__setattr__(self, 'include_country_codes', tuple(self.include_country_codes))
        object.__setattr__(self, 'exclude_country_codes', tuple(self.exclude_country_codes))

    def is_available_in(self, country_code: str) -> bool:
        """
        Check whether the preset applies in the given ISO 3166-1 alpha-2 country.

        An empty include list means worldwide.
        """

        country_code = country_code.upper()

        if country_code in self.exclude_country_codes:
            return False

        return not self.include_country_codes or country_code in self.include_country_codes

