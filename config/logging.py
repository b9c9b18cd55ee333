from __future__ import annotations

import os
from typing import Dict, Any

# Default logging channel
default = os.getenv('LOG_CHANNEL', 'blobfs')

channels: Dict[str, Dict[str, Any]] = {
    'blobfs': {
        'driver': 'stack',
        'channels': ['stderr'],
        'level': os.getenv('LOG_LEVEL', 'info'),
    },

    'single': {
        'driver': 'single',
        'path': 'storage/logs/blobfs.log',
        'level': os.getenv('LOG_LEVEL', 'debug'),
    },

    'daily': {
        'driver': 'daily',
        'path': 'storage/logs/blobfs.log',
        'level': os.getenv('LOG_LEVEL', 'debug'),
        'days': 14,
    },

    'stderr': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'debug'),
        'formatter': 'laravel',
    },

    'json': {
        'driver': 'single',
        'path': 'storage/logs/json.log',
        'level': os.getenv('LOG_LEVEL', 'debug'),
        'formatter': 'json',
    },
}
