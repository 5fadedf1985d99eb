from collections.abc import Sequence
from os import PathLike

import orjson
from anyio import Path
from sentry_sdk import trace

from config import ID_PRESETS_FETCH_TIMEOUT, ID_PRESETS_URL
from id_presets_parser import parse
from models.feature import Feature
from utils import HTTP, JSON_DECODE, retry_exponential


class PresetsDocumentError(ValueError):
    """
    The presets document could not be decoded as a JSON object.
    """


def decode_document(buffer: bytes | str) -> dict:
    try:
        data = JSON_DECODE(buffer)
    except orjson.JSONDecodeError as e:
        raise PresetsDocumentError(f'Invalid presets document: {e}') from e

    if not isinstance(data, dict):
        raise PresetsDocumentError(f'Expected presets document to be an object, got {type(data).__name__}')

    return data


@trace
async def load_id_presets(path: str | PathLike[str]) -> Sequence[Feature]:
    buffer = await Path(path).read_bytes()
    return parse(decode_document(buffer))


@retry_exponential(ID_PRESETS_FETCH_TIMEOUT, give_up_on=(PresetsDocumentError,))
@trace
async def get_id_presets(url: str = ID_PRESETS_URL) -> Sequence[Feature]:
    r = await HTTP.get(url)
    r.raise_for_status()
    return parse(decode_document(r.content))
