from __future__ import annotations

import os
from typing import Dict, Any

# Default filesystem disk
default = os.getenv('FILESYSTEM_DISK', 'azure')

# Filesystem disks configuration
disks: Dict[str, Dict[str, Any]] = {
    'azure': {
        'driver': 'azure',
        'connection_string': os.getenv('AZURE_STORAGE_CONNECTION_STRING'),
        'account_name': os.getenv('AZURE_STORAGE_ACCOUNT'),
        'account_key': os.getenv('AZURE_STORAGE_KEY'),
        'url': os.getenv('AZURE_STORAGE_URL'),
        'container': os.getenv('AZURE_STORAGE_CONTAINER'),
        'prefix': os.getenv('AZURE_STORAGE_PREFIX', ''),
        'chunk_size': int(os.getenv('AZURE_STORAGE_CHUNK_SIZE', 50000)),
        'max_results': int(os.getenv('AZURE_STORAGE_MAX_RESULTS', 5000)),
        # 'error' or 'ignore'
        'visibility_handling': os.getenv('AZURE_STORAGE_VISIBILITY_HANDLING', 'error'),
        'create_container': os.getenv('AZURE_STORAGE_CREATE_CONTAINER', 'false').lower() == 'true',
        # 'blob', 'container' or empty for private
        'public_access': os.getenv('AZURE_STORAGE_PUBLIC_ACCESS', 'blob'),
    },
}
