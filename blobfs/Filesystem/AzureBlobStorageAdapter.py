from __future__ import annotations

import base64
import binascii
import dataclasses
import hashlib
import itertools
import logging
import tempfile
import time
import uuid
from datetime import datetime
from typing import Any, BinaryIO, Dict, Iterator, List, Optional, Tuple, Union, cast

from azure.core.exceptions import AzureError
from azure.storage.blob import (
    BlobBlock,
    BlobProperties,
    BlobSasPermissions,
    ContentSettings,
    generate_blob_sas,
)

from .Config import Config
from .ErrorTranslator import describe, is_not_found
from .Exceptions import (
    FilesystemOperationFailed,
    UnableToCheckDirectoryExistence,
    UnableToCheckFileExistence,
    UnableToCopyFile,
    UnableToDeleteFile,
    UnableToGeneratePublicUrl,
    UnableToGenerateTemporaryUrl,
    UnableToListContents,
    UnableToMoveFile,
    UnableToProvideChecksum,
    UnableToReadFile,
    UnableToRetrieveMetadata,
    UnableToWriteFile,
)
from .FilesystemAdapter import FilesystemAdapter
from .MimeTypeDetector import MimeTypeDetector
from .PathPrefixer import PathPrefixer
from .StorageAttributes import DirectoryAttributes, FileAttributes, StorageAttributes
from .Visibility import VisibilityHandling, VisibilityPolicy


class AzureBlobStorageAdapter(FilesystemAdapter):
    """
    Filesystem adapter backed by a single Azure Blob Storage container.

    Blob storage has a flat key space: directories exist only as shared key
    prefixes, so creating one is a no-op and checking one lists the prefix.
    Move is a server side copy followed by a delete and is not atomic; if the
    delete fails both blobs remain and UnableToMoveFile is raised.

    The service client is borrowed, never closed here. Access level is a
    container setting, so per-object visibility changes are handled by the
    configured VisibilityHandling instead of the backend.
    """

    ON_VISIBILITY_THROW_ERROR = VisibilityHandling.ERROR
    ON_VISIBILITY_IGNORE = VisibilityHandling.IGNORE

    DEFAULT_CHUNK_SIZE = 50000
    DEFAULT_MAX_RESULTS_FOR_CONTENTS_LISTING = 5000
    COPY_POLL_INTERVAL = 0.5
    COPY_POLL_MAX_ATTEMPTS = 120
    SPOOL_MAX_SIZE = 5 * 1024 * 1024

    def __init__(
        self,
        client: Any,
        container: str,
        prefix: str = '',
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        visibility_handling: Union[VisibilityHandling, str] = VisibilityHandling.ERROR,
        *,
        mime_type_detector: Optional[MimeTypeDetector] = None,
        max_results_for_contents_listing: int = DEFAULT_MAX_RESULTS_FOR_CONTENTS_LISTING,
        account_key: Optional[str] = None,
    ) -> None:
        if not container:
            raise ValueError("A container name is required")
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be a positive number of bytes, got {chunk_size}")

        self.client = client
        self.container = container
        self.prefixer = PathPrefixer(prefix)
        self.chunk_size = chunk_size
        self.visibility_policy = VisibilityPolicy(VisibilityHandling.from_value(visibility_handling))
        self.mime_type_detector = mime_type_detector or MimeTypeDetector()
        self.max_results_for_contents_listing = max_results_for_contents_listing
        self.account_key = account_key

        self.container_client = client.get_container_client(container)
        self.logger = logging.getLogger(__name__)

    @property
    def prefix(self) -> str:
        return self.prefixer.prefix

    def _blob(self, key: str) -> Any:
        return self.container_client.get_blob_client(key)

    def _context(self, path: str, key: str) -> Dict[str, Any]:
        return {'context': {'location': path, 'container': self.container, 'key': key}}

    # Writing

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Config] = None) -> None:
        """Upload contents to the path, replacing any existing blob."""
        config = config or Config()
        key = self.prefixer.prefix_path(path)
        self.visibility_policy.apply_requested(path, config.get(Config.OPTION_VISIBILITY))

        data = contents.encode('utf-8') if isinstance(contents, str) else contents
        content_settings = self._content_settings(path, data, config)

        self.logger.debug("Uploading blob", extra=self._context(path, key))
        try:
            self._blob(key).upload_blob(data, overwrite=True, content_settings=content_settings)
        except AzureError as e:
            raise UnableToWriteFile.at_location(path, describe(e), e) from e

    def write_stream(self, path: str, stream: BinaryIO, config: Optional[Config] = None) -> None:
        """
        Upload a binary stream to the path, replacing any existing blob.

        Streams that fit in one chunk go up in a single request. Larger ones
        are staged block by block and become visible in one commit.
        """
        config = config or Config()
        key = self.prefixer.prefix_path(path)
        self.visibility_policy.apply_requested(path, config.get(Config.OPTION_VISIBILITY))

        blob = self._blob(key)
        try:
            first_chunk = self._read_chunk(stream)
            content_settings = self._content_settings(path, first_chunk, config)
            next_chunk = self._read_chunk(stream) if len(first_chunk) == self.chunk_size else b''

            if not next_chunk:
                self.logger.debug("Uploading blob", extra=self._context(path, key))
                blob.upload_blob(first_chunk, overwrite=True, content_settings=content_settings)
                return

            chunks = itertools.chain(
                (first_chunk, next_chunk),
                iter(lambda: self._read_chunk(stream), b''),
            )
            block_list = self._stage_blocks(blob, chunks)
            self.logger.debug(
                "Committing %d staged blocks", len(block_list), extra=self._context(path, key)
            )
            blob.commit_block_list(block_list, content_settings=content_settings)
        except AzureError as e:
            raise UnableToWriteFile.at_location(path, describe(e), e) from e
        except OSError as e:
            raise UnableToWriteFile.at_location(path, f"Unable to read the source stream: {e}", e) from e

    def _read_chunk(self, stream: BinaryIO) -> bytes:
        """Read up to chunk_size bytes; shorter only at the end of the stream."""
        buffer = bytearray()
        while len(buffer) < self.chunk_size:
            data = stream.read(self.chunk_size - len(buffer))
            if not data:
                break
            buffer.extend(data)
        return bytes(buffer)

    def _stage_blocks(self, blob: Any, chunks: Iterator[bytes]) -> List[BlobBlock]:
        upload_id = uuid.uuid4().hex
        block_list: List[BlobBlock] = []
        for chunk in chunks:
            block_id = base64.b64encode(f"{upload_id}-{len(block_list):08d}".encode()).decode()
            blob.stage_block(block_id, chunk)
            block_list.append(BlobBlock(block_id=block_id))
        return block_list

    def _content_settings(self, path: str, contents: bytes, config: Config) -> ContentSettings:
        mime_type = config.get(Config.OPTION_MIMETYPE) or self.mime_type_detector.detect_mime_type(path, contents)
        return ContentSettings(content_type=mime_type)

    # Reading

    def read(self, path: str) -> bytes:
        key = self.prefixer.prefix_path(path)
        self.logger.debug("Downloading blob", extra=self._context(path, key))
        try:
            return cast(bytes, self._blob(key).download_blob().readall())
        except AzureError as e:
            raise self._read_error(path, e) from e

    def read_stream(self, path: str) -> BinaryIO:
        """Download the blob into a spooled temporary file positioned at the start."""
        key = self.prefixer.prefix_path(path)
        self.logger.debug("Streaming blob", extra=self._context(path, key))
        stream = tempfile.SpooledTemporaryFile(max_size=self.SPOOL_MAX_SIZE)
        try:
            self._blob(key).download_blob().readinto(stream)
        except AzureError as e:
            stream.close()
            raise self._read_error(path, e) from e

        stream.seek(0)
        return cast(BinaryIO, stream)

    def _read_error(self, path: str, error: AzureError) -> UnableToReadFile:
        if is_not_found(error):
            return UnableToReadFile.from_location(path, 'File does not exist.', error)
        return UnableToReadFile.because_existence_is_unknown(path, error)

    # Deleting

    def delete(self, path: str) -> None:
        """Delete the blob. Deleting a missing blob is not an error."""
        key = self.prefixer.prefix_path(path)
        self.logger.debug("Deleting blob", extra=self._context(path, key))
        try:
            self._blob(key).delete_blob()
        except AzureError as e:
            if is_not_found(e):
                return
            raise UnableToDeleteFile.at_location(path, describe(e), e) from e

    def delete_directory(self, path: str) -> None:
        """
        Delete every blob below the directory, one at a time.

        A failed delete does not stop the rest; afterwards the first failure
        is raised as UnableToDeleteFile for that blob's path.
        """
        prefix = self.prefixer.prefix_directory_path(path)
        first_failure: Optional[Tuple[str, AzureError]] = None
        failures = 0

        try:
            blobs = self.container_client.list_blobs(
                name_starts_with=prefix,
                results_per_page=self.max_results_for_contents_listing,
            )
            for blob in blobs:
                try:
                    self._blob(blob.name).delete_blob()
                except AzureError as e:
                    if is_not_found(e):
                        continue
                    failures += 1
                    self.logger.warning(
                        "Unable to delete blob: %s", describe(e),
                        extra=self._context(path, blob.name),
                    )
                    if first_failure is None:
                        first_failure = (blob.name, e)
        except AzureError as e:
            reason = f"Unable to list the directory contents. {describe(e)}"
            raise UnableToDeleteFile.at_location(path, reason, e) from e

        if first_failure is not None:
            key, error = first_failure
            reason = f"{failures} blob(s) below '{path}' could not be deleted. {describe(error)}"
            raise UnableToDeleteFile.at_location(self.prefixer.strip_prefix(key), reason, error) from error

    def create_directory(self, path: str, config: Optional[Config] = None) -> None:
        """Directories are implied by blob names, there is nothing to create."""
        self.prefixer.prefix_directory_path(path)

    # Copying and moving

    def copy(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        """Server side copy within the container, overwriting the destination."""
        config = config or Config()
        source_key = self.prefixer.prefix_path(source)
        destination_key = self.prefixer.prefix_path(destination)
        self.visibility_policy.apply_requested(destination, config.get(Config.OPTION_VISIBILITY))

        self.logger.debug(
            "Copying blob to %s", destination_key, extra=self._context(source, source_key)
        )
        try:
            destination_blob = self._blob(destination_key)
            result = destination_blob.start_copy_from_url(self._blob(source_key).url)
            status = result.get('copy_status')
            attempts = 0
            while status == 'pending' and attempts < self.COPY_POLL_MAX_ATTEMPTS:
                time.sleep(self.COPY_POLL_INTERVAL)
                attempts += 1
                status = destination_blob.get_blob_properties().copy.status
        except AzureError as e:
            reason = 'Source file does not exist.' if is_not_found(e) else describe(e)
            raise UnableToCopyFile.from_location_to(source, destination, e, reason) from e

        if status == 'pending':
            self._abort_copy(destination_blob, result.get('copy_id'), destination, destination_key)
            raise UnableToCopyFile.from_location_to(source, destination, reason='Copy did not complete.')
        if status != 'success':
            raise UnableToCopyFile.from_location_to(
                source, destination, reason=f"Copy finished with status '{status}'."
            )

    def _abort_copy(self, blob: Any, copy_id: Optional[str], path: str, key: str) -> None:
        try:
            blob.abort_copy(copy_id)
        except AzureError as e:
            self.logger.warning("Unable to abort pending copy: %s", describe(e), extra=self._context(path, key))

    def move(self, source: str, destination: str, config: Optional[Config] = None) -> None:
        """Copy to the destination, then delete the source."""
        try:
            if self.prefixer.prefix_path(source) == self.prefixer.prefix_path(destination):
                if not self.file_exists(source):
                    raise UnableToMoveFile.from_location_to(
                        source, destination, reason='Source file does not exist.'
                    )
                return

            self.copy(source, destination, config)
            self.delete(source)
        except UnableToMoveFile:
            raise
        except FilesystemOperationFailed as e:
            raise UnableToMoveFile.from_location_to(source, destination, e, e.reason) from e

    # Existence

    def file_exists(self, path: str) -> bool:
        key = self.prefixer.prefix_path(path)
        try:
            self._blob(key).get_blob_properties()
        except AzureError as e:
            if is_not_found(e):
                return False
            raise UnableToCheckFileExistence.for_location(path, e) from e
        return True

    def directory_exists(self, path: str) -> bool:
        """True when at least one blob name starts with the directory prefix."""
        prefix = self.prefixer.prefix_directory_path(path)
        try:
            blobs = self.container_client.list_blobs(name_starts_with=prefix, results_per_page=1)
            return next(iter(blobs), None) is not None
        except AzureError as e:
            raise UnableToCheckDirectoryExistence.for_location(path, e) from e

    # Listing

    def list_contents(self, path: str = '', deep: bool = False) -> Iterator[StorageAttributes]:
        """
        Lazily list the entries below a directory, page by page.

        A shallow listing yields one DirectoryAttributes per distinct next
        path segment. A deep listing yields files only. Order is whatever the
        service returns, which is lexicographic by blob name.
        """
        prefix = self.prefixer.prefix_directory_path(path)
        return self._iterate_contents(path, prefix, deep)

    def _iterate_contents(self, path: str, prefix: str, deep: bool) -> Iterator[StorageAttributes]:
        try:
            if deep:
                items = self.container_client.list_blobs(
                    name_starts_with=prefix,
                    results_per_page=self.max_results_for_contents_listing,
                )
            else:
                items = self.container_client.walk_blobs(
                    name_starts_with=prefix,
                    delimiter=self.prefixer.separator,
                    results_per_page=self.max_results_for_contents_listing,
                )

            for item in items:
                if isinstance(item, BlobProperties):
                    relative = self.prefixer.strip_prefix(item.name)
                    if relative and not relative.endswith(self.prefixer.separator):
                        yield self._normalize_blob_properties(relative, item)
                else:
                    yield DirectoryAttributes(self.prefixer.strip_directory_prefix(item.name))
        except AzureError as e:
            raise UnableToListContents.at_location(path, deep, e) from e

    # Metadata

    def mime_type(self, path: str) -> FileAttributes:
        return self._fetch_metadata(path, UnableToRetrieveMetadata.METADATA_TYPE_MIME_TYPE)

    def file_size(self, path: str) -> FileAttributes:
        return self._fetch_metadata(path, UnableToRetrieveMetadata.METADATA_TYPE_FILE_SIZE)

    def last_modified(self, path: str) -> FileAttributes:
        return self._fetch_metadata(path, UnableToRetrieveMetadata.METADATA_TYPE_LAST_MODIFIED)

    def visibility(self, path: str) -> FileAttributes:
        """Always reports the container level access, after checking the blob exists."""
        attributes = self._fetch_metadata(path, UnableToRetrieveMetadata.METADATA_TYPE_VISIBILITY)
        return dataclasses.replace(attributes, visibility=str(VisibilityPolicy.REPORTED_VISIBILITY))

    def set_visibility(self, path: str, visibility: str) -> None:
        """The configured handling decides first; under IGNORE the path is still validated."""
        self.visibility_policy.set_visibility(path, visibility)
        self.prefixer.prefix_path(path)

    def _fetch_metadata(self, path: str, metadata_type: str) -> FileAttributes:
        key = self.prefixer.prefix_path(path)
        try:
            properties = self._blob(key).get_blob_properties()
        except AzureError as e:
            reason = 'File does not exist.' if is_not_found(e) else describe(e)
            raise UnableToRetrieveMetadata.create(path, metadata_type, reason, e) from e
        return self._normalize_blob_properties(self.prefixer.strip_prefix(key), properties)

    def _normalize_blob_properties(self, path: str, properties: Any) -> FileAttributes:
        content_settings = properties.content_settings
        mime_type = getattr(content_settings, 'content_type', None)
        content_md5 = getattr(content_settings, 'content_md5', None)
        last_modified = properties.last_modified

        extra_metadata: Dict[str, Any] = {}
        if content_md5:
            extra_metadata['md5_checksum'] = base64.b64encode(bytes(content_md5)).decode()

        return FileAttributes(
            path=path,
            file_size=properties.size,
            last_modified=int(last_modified.timestamp()) if last_modified else None,
            mime_type=mime_type or self.mime_type_detector.detect_mime_type(path),
            extra_metadata=extra_metadata,
        )

    # Checksums and URLs

    def checksum(self, path: str, config: Optional[Config] = None) -> str:
        """
        Hex digest of the blob contents.

        For md5 the Content-MD5 stored with the blob is used when present,
        otherwise the contents are streamed and hashed.
        """
        config = config or Config()
        algo = config.get(Config.OPTION_CHECKSUM_ALGO, 'md5')

        if algo == 'md5':
            try:
                metadata = self._fetch_metadata(path, 'checksum')
            except UnableToRetrieveMetadata as e:
                raise UnableToProvideChecksum(e.reason, path, e) from e
            md5 = metadata.extra_metadata.get('md5_checksum')
            if md5:
                return binascii.hexlify(base64.b64decode(md5)).decode()

        return self._calculate_checksum_from_stream(path, algo)

    def _calculate_checksum_from_stream(self, path: str, algo: str) -> str:
        try:
            digest = hashlib.new(algo)
        except ValueError as e:
            raise UnableToProvideChecksum(f"Unsupported checksum algorithm '{algo}'.", path, e) from e

        try:
            stream = self.read_stream(path)
        except UnableToReadFile as e:
            raise UnableToProvideChecksum(e.reason, path, e) from e

        with stream:
            for chunk in iter(lambda: stream.read(self.chunk_size), b''):
                digest.update(chunk)
        return digest.hexdigest()

    def public_url(self, path: str, config: Optional[Config] = None) -> str:
        key = self.prefixer.prefix_path(path)
        try:
            return cast(str, self._blob(key).url)
        except (AzureError, ValueError) as e:
            raise UnableToGeneratePublicUrl(str(e), path, e) from e

    def temporary_url(self, path: str, expires_at: datetime, config: Optional[Config] = None) -> str:
        """Read-only SAS URL valid until expires_at."""
        key = self.prefixer.prefix_path(path)
        credential = getattr(self.client, 'credential', None)
        account_key = self.account_key or getattr(credential, 'account_key', None)
        if not account_key:
            raise UnableToGenerateTemporaryUrl('No account key available to sign the URL.', path)

        try:
            sas_token = generate_blob_sas(
                account_name=self.client.account_name,
                container_name=self.container,
                blob_name=key,
                account_key=account_key,
                permission=BlobSasPermissions(read=True),
                expiry=expires_at,
            )
            return f"{self._blob(key).url}?{sas_token}"
        except (AzureError, ValueError, TypeError) as e:
            raise UnableToGenerateTemporaryUrl(str(e), path, e) from e
