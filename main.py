import logging
import sys
from collections import Counter

import anyio

from config import ID_PRESETS_PATH, ID_PRESETS_URL
from id_presets import load_id_presets
from services.preset_service import PresetService


async def main(source: str | None = None) -> None:
    if source is not None and source.startswith(('http://', 'https://')):
        await PresetService.update(source)
    elif source is not None:
        PresetService.load(await load_id_presets(source))
    elif await ID_PRESETS_PATH.is_file():
        PresetService.load(await load_id_presets(ID_PRESETS_PATH))
    else:
        await PresetService.update(ID_PRESETS_URL)

    features = PresetService.get_all()
    geometry_counts = Counter(g for f in features for g in f.geometry)

    logging.info('Suggestions: %d', sum(f.suggestion for f in features))
    for geometry, count in sorted(geometry_counts.items()):
        logging.info('Geometry %s: %d', geometry, count)


if __name__ == '__main__':
    anyio.run(main, sys.argv[1] if len(sys.argv) > 1 else None)
