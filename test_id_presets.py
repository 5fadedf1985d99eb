import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import orjson
from httpx import AsyncClient, MockTransport, Request, Response

from id_presets import PresetsDocumentError, decode_document, get_id_presets, load_id_presets

_DOCUMENT = {
    'amenity/bench': {
        'tags': {'amenity': 'bench'},
        'geometry': ['point', 'vertex', 'line'],
        'name': 'Bench',
        'terms': ['seat'],
    },
    'amenity': {
        'tags': {'amenity': '*'},
        'geometry': ['point'],
        'name': 'Amenity',
    },
    'highway/bus_stop': {
        'tags': {'highway': 'bus_stop'},
        'geometry': ['point', 'vertex'],
        'name': 'Bus Stop',
        'locationSet': {'include': ['001']},
    },
}


class TestDecodeDocument(unittest.TestCase):
    def test_decode_document(self):
        self.assertEqual(decode_document(orjson.dumps(_DOCUMENT)), _DOCUMENT)

    def test_decode_document__empty(self):
        self.assertEqual(decode_document(b'{}'), {})

    def test_decode_document__malformed(self):
        with self.assertRaises(PresetsDocumentError):
            decode_document(b'{"amenity/bench": ')

    def test_decode_document__not_an_object(self):
        with self.assertRaises(PresetsDocumentError):
            decode_document(b'[]')


class TestLoadIDPresets(unittest.IsolatedAsyncioTestCase):
    async def test_load_id_presets(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'presets.json'
            path.write_bytes(orjson.dumps(_DOCUMENT))

            features = await load_id_presets(path)

        self.assertEqual([f.id for f in features], ['amenity/bench', 'highway/bus_stop'])
        self.assertEqual(features[1].include_country_codes, ())

    async def test_load_id_presets__missing_file(self):
        with tempfile.TemporaryDirectory() as tmp, self.assertRaises(FileNotFoundError):
            await load_id_presets(Path(tmp) / 'presets.json')


class TestGetIDPresets(unittest.IsolatedAsyncioTestCase):
    async def test_get_id_presets(self):
        requested = []

        def handler(request: Request) -> Response:
            requested.append(str(request.url))
            return Response(200, content=orjson.dumps(_DOCUMENT))

        async with AsyncClient(transport=MockTransport(handler)) as client:
            with patch('id_presets.HTTP', client):
                features = await get_id_presets('https://example.org/presets.json')

        self.assertEqual(requested, ['https://example.org/presets.json'])
        self.assertEqual([f.id for f in features], ['amenity/bench', 'highway/bus_stop'])

    async def test_get_id_presets__malformed_not_retried(self):
        calls = 0

        def handler(request: Request) -> Response:
            nonlocal calls
            calls += 1
            return Response(200, content=b'<html></html>')

        async with AsyncClient(transport=MockTransport(handler)) as client:
            with patch('id_presets.HTTP', client), self.assertRaises(PresetsDocumentError):
                await get_id_presets('https://example.org/presets.json')

        self.assertEqual(calls, 1)


if __name__ == '__main__':
    unittest.main()
