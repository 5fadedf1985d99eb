import os
from datetime import timedelta
from logging.config import dictConfig

import sentry_sdk
from anyio import Path

NAME = 'osm-presets'
VERSION = '1.0.0'
WEBSITE = 'https://github.com/openstreetmap/id-tagging-schema'

USER_AGENT = f'{NAME}/{VERSION} (+{WEBSITE})'
ENVIRONMENT = os.getenv('ENVIRONMENT')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').strip().upper()

ID_PRESETS_URL = os.getenv(
    'ID_PRESETS_URL',
    'https://raw.githubusercontent.com/openstreetmap/id-tagging-schema/main/dist/presets.json',
)
ID_PRESETS_FETCH_TIMEOUT = timedelta(minutes=float(os.getenv('ID_PRESETS_FETCH_TIMEOUT', '5')))

# "worldwide" in location sets
WORLDWIDE_REGION_CODE = '001'

ID_PRESETS_PATH = Path('data/presets.json')

# Logging configuration
dictConfig(
    {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(levelname)s | %(asctime)s | %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'default': {
                'formatter': 'default',
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stderr',
            },
        },
        'loggers': {
            'root': {'handlers': ['default'], 'level': LOG_LEVEL},
            **{
                # reduce logging verbosity of some modules
                module: {'handlers': [], 'level': 'INFO'}
                for module in (
                    'hpack',
                    'httpx',
                    'httpcore',
                )
            },
        },
    }
)

if SENTRY_DSN := os.getenv('SENTRY_DSN'):
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        release=VERSION,
        environment=ENVIRONMENT,
        enable_tracing=True,
        traces_sample_rate=0.2,
        trace_propagation_targets=None,
    )
