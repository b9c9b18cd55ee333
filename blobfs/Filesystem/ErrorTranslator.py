from __future__ import annotations

import logging
from typing import Any, Optional

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError

NOT_FOUND_ERROR_CODES = frozenset({'BlobNotFound', 'ContainerNotFound', 'ResourceNotFound'})
CONFLICT_ERROR_CODES = frozenset({'ContainerAlreadyExists', 'BlobAlreadyExists'})

logger = logging.getLogger(__name__)


def status_code(error: BaseException) -> Optional[int]:
    """HTTP status carried by an Azure error, if any."""
    code = getattr(error, 'status_code', None)
    if code is None:
        response = getattr(error, 'response', None)
        code = getattr(response, 'status_code', None)
    return code


def error_code(error: BaseException) -> Optional[str]:
    """Storage service error code carried by an Azure error, if any."""
    code = getattr(error, 'error_code', None)
    if code is None:
        return None
    return str(getattr(code, 'value', code))


def is_not_found(error: BaseException) -> bool:
    if isinstance(error, ResourceNotFoundError):
        return True
    return status_code(error) == 404 or error_code(error) in NOT_FOUND_ERROR_CODES


def is_conflict(error: BaseException) -> bool:
    if isinstance(error, ResourceExistsError):
        return True
    return status_code(error) == 409 or error_code(error) in CONFLICT_ERROR_CODES


def describe(error: BaseException) -> str:
    """One-line reason for an Azure error, used in wrapped exception messages."""
    parts = []
    code = status_code(error)
    if code is not None:
        parts.append(str(code))
    service_code = error_code(error)
    if service_code:
        parts.append(service_code)
    message = getattr(error, 'message', None) or str(error)
    if message:
        parts.append(message.splitlines()[0])
    return ' '.join(parts) or error.__class__.__name__


def ensure_container(client: Any, container: str, public_access: Optional[str] = 'blob') -> bool:
    """
    Create the container, treating an already existing one as success.

    Returns True when the container was created by this call.
    """
    try:
        client.create_container(container, public_access=public_access)
    except AzureError as e:
        if not is_conflict(e):
            raise
        logger.debug("Container already exists", extra={'context': {'container': container}})
        return False

    logger.info("Container created", extra={'context': {'container': container, 'public_access': public_access}})
    return True
