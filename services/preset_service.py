import logging
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from sentry_sdk import trace

from config import ID_PRESETS_URL
from id_presets import get_id_presets
from models.feature import Feature

_catalog: Mapping[str, Feature] = MappingProxyType({})


def build_catalog(features: Iterable[Feature]) -> Mapping[str, Feature]:
    # later duplicates replace earlier ones
    return MappingProxyType({f.id: f for f in features})


class PresetService:
    @staticmethod
    def load(features: Iterable[Feature]) -> None:
        global _catalog
        _catalog = build_catalog(features)
        logging.info('Loaded %d presets', len(_catalog))

    @staticmethod
    @trace
    async def update(url: str = ID_PRESETS_URL) -> None:
        logging.info('Updating presets from %s', url)
        PresetService.load(await get_id_presets(url))

    @staticmethod
    def get_by_id(id: str) -> Feature | None:
        return _catalog.get(id)

    @staticmethod
    def get_all() -> Sequence[Feature]:
        return tuple(_catalog.values())
