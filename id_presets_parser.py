import logging
import sys
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from pydantic import ValidationError
from sentry_sdk import trace

from config import WORLDWIDE_REGION_CODE
from models.feature import Feature, any_key_or_value_contains_wildcard
from models.id_preset import IDPreset, LocationSet
from models.parse_result import Parsed, ParseResult, Rejected


@trace
def parse(document: Mapping[str, Any]) -> Sequence[Feature]:
    """
    Parse the decoded presets.json into features, in document order.

    Entries which fail to parse are left out; a single bad entry never fails the whole document.
    """

    result = []
    rejected = 0

    for r in parse_entries(document):
        if isinstance(r, Parsed):
            result.append(r.feature)
        else:
            logging.debug('Skipped preset %r: %s', r.id, r.reason)
            rejected += 1

    logging.info('Parsed %d presets, rejected %d', len(result), rejected)
    return tuple(result)


def parse_entries(document: Mapping[str, Any]) -> Iterator[ParseResult]:
    return (parse_entry(id, raw) for id, raw in document.items())


def parse_entry(id: str, raw: Any) -> ParseResult:
    try:
        preset = IDPreset.model_validate(raw)
    except ValidationError as e:
        return Rejected(id, _describe_validation_error(e))

    # such presets describe a category of things, never a concrete thing
    if any_key_or_value_contains_wildcard(preset.tags):
        return Rejected(id, 'Wildcard in tags')

    # generic point, line, relation
    if not preset.tags:
        return Rejected(id, 'Empty tags')

    if preset.location_set is not None:
        country_codes = _parse_location_set(preset.location_set)
        if country_codes is None:
            return Rejected(id, 'Unsupported location set')
        include_country_codes, exclude_country_codes = country_codes
    else:
        include_country_codes, exclude_country_codes = (), ()

    try:
        feature = Feature(
            id=id,
            tags=preset.tags,
            geometry=tuple(preset.geometry),
            name=preset.name,
            icon=preset.icon,
            image_url=preset.image_url,
            terms=tuple(preset.terms),
            include_country_codes=include_country_codes,
            exclude_country_codes=exclude_country_codes,
            searchable=preset.searchable,
            match_score=preset.match_score,
            suggestion=preset.suggestion,
            # present (even if empty) overrides, absent falls back: tags -> add_tags -> remove_tags
            add_tags=preset.add_tags,
            remove_tags=preset.remove_tags,
        )
    except ValueError as e:
        return Rejected(id, str(e))

    return Parsed(feature)


def _parse_location_set(location_set: LocationSet) -> tuple[tuple[str, ...], tuple[str, ...]] | None:
    """
    Normalize the location set into (include, exclude) country codes.

    Returns None when any code is not an ISO 3166-1 alpha-2 code,
    e.g. '150' (Europe) or 'city_national_bank_fl.geojson'.
    """

    include = _normalize_country_codes(location_set.include)
    include.pop(WORLDWIDE_REGION_CODE, None)
    exclude = _normalize_country_codes(location_set.exclude)

    if not all(len(code) == 2 for code in (*include, *exclude)):
        return None

    return tuple(include), tuple(exclude)


def _normalize_country_codes(codes: Iterable[str]) -> dict[str, None]:
    # dict as an ordered set
    return dict.fromkeys(sys.intern(code.upper()) for code in codes)


def _describe_validation_error(e: ValidationError) -> str:
    error = e.errors(include_url=False)[0]
    loc = '.'.join(str(part) for part in error['loc']) or '<root>'
    return f'{loc}: {error["msg"]}'
