"""
Document sources: resolve a validation target into in-memory text.

Three kinds of input are supported:
- UploadedDocument: a caller-supplied byte stream (multipart upload)
- PathDocument: a file in the shared document cache, opened directly
- ZipDocument: an uploaded archive; the first entry with non-empty text wins

Every source releases its stream exactly once, whether reading succeeds,
yields empty text or fails. Read failures surface as DocumentAcquisitionError.
"""

import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional

import structlog

from ccda_validation.sources.exceptions import DocumentAcquisitionError

logger = structlog.get_logger(__name__)

ZIP_SUFFIX = ".zip"


def decode_document(data: bytes) -> str:
    """Decode UTF-8 bytes, dropping a leading byte-order mark."""
    return data.decode("utf-8-sig", errors="replace")


class DocumentSource(ABC):
    """
    Base class for anything the pipeline can read a document from.

    Subclasses provide the stream and how to turn it into text; this class
    owns the stream lifecycle and the error wrapping.
    """

    def __init__(self, name: str, max_bytes: Optional[int] = None):
        self.name = name
        self.max_bytes = max_bytes

    @abstractmethod
    def _open(self) -> BinaryIO:
        """Return the stream to read. Closed by read_text()."""

    @abstractmethod
    def _read(self, stream: BinaryIO) -> str:
        """Turn the open stream into document text."""

    def read_text(self) -> str:
        """
        Read the document as text.

        Returns:
            Decoded document text; may be empty

        Raises:
            DocumentAcquisitionError: If the stream cannot be opened or read
        """
        try:
            with self._open() as stream:
                text = self._read(stream)
        except DocumentAcquisitionError:
            raise
        except Exception as e:
            raise DocumentAcquisitionError(
                f"Error getting C-CDA contents from provided file: {e}",
                cause=e,
                source_name=self.name,
            ) from e

        logger.debug("Document read", source=self.name, length=len(text))
        return text

    def _read_bytes(self, stream: BinaryIO) -> bytes:
        if self.max_bytes is None:
            return stream.read()

        data = stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise DocumentAcquisitionError(
                f"Document exceeds the maximum allowed size of {self.max_bytes} bytes",
                source_name=self.name,
            )
        return data


class UploadedDocument(DocumentSource):
    """A document supplied as a byte stream, e.g. a multipart upload."""

    def __init__(self, name: str, stream: BinaryIO, max_bytes: Optional[int] = None):
        super().__init__(name, max_bytes)
        self._stream = stream

    def _open(self) -> BinaryIO:
        return self._stream

    def _read(self, stream: BinaryIO) -> str:
        return decode_document(self._read_bytes(stream))


class ZipDocument(UploadedDocument):
    """
    An uploaded zip archive.

    Entries are visited in archive order; the decoded text of the first
    entry that is not empty is the document. An archive with no such entry
    yields empty text.
    """

    def _read(self, stream: BinaryIO) -> str:
        # ZipFile does not close a file object it was handed
        with zipfile.ZipFile(stream) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                if self.max_bytes is not None and info.file_size > self.max_bytes:
                    raise DocumentAcquisitionError(
                        f"Archive entry {info.filename} exceeds the maximum allowed size "
                        f"of {self.max_bytes} bytes",
                        source_name=self.name,
                    )
                text = decode_document(archive.read(info))
                if text:
                    logger.debug("Using archive entry", source=self.name, entry=info.filename)
                    return text

        logger.info("Archive has no non-empty entries", source=self.name)
        return ""


class PathDocument(DocumentSource):
    """
    A document read directly from the filesystem.

    When cache_dir is set, the path is resolved against it and must not
    escape it. With require_cache_dir, a missing cache_dir fails the read
    instead of falling back to the raw path.
    """

    def __init__(
        self,
        path: str,
        cache_dir: Optional[str] = None,
        max_bytes: Optional[int] = None,
        require_cache_dir: bool = False,
    ):
        super().__init__(Path(path).name, max_bytes)
        self.path = path
        self.cache_dir = cache_dir
        self.require_cache_dir = require_cache_dir

    @classmethod
    def from_cache(cls, path: str, cache_dir: Optional[str], max_bytes: Optional[int] = None) -> "PathDocument":
        """Source for caller-supplied paths: always confined to the shared document cache."""
        return cls(path, cache_dir=cache_dir, max_bytes=max_bytes, require_cache_dir=True)

    def _resolve(self) -> Path:
        if not self.cache_dir:
            if self.require_cache_dir:
                raise DocumentAcquisitionError(
                    "No shared document cache is configured, path-based requests are disabled",
                    source_name=self.name,
                )
            return Path(self.path)

        root = Path(self.cache_dir).resolve()
        candidate = (root / self.path).resolve()
        if not candidate.is_relative_to(root):
            raise DocumentAcquisitionError(
                f"Document path {self.path} is outside the shared document cache",
                source_name=self.name,
            )
        return candidate

    def _open(self) -> BinaryIO:
        return open(self._resolve(), "rb")

    def _read(self, stream: BinaryIO) -> str:
        return decode_document(self._read_bytes(stream))


def from_upload(filename: Optional[str], stream: BinaryIO, max_bytes: Optional[int] = None) -> UploadedDocument:
    """
    Build the right source for an uploaded file.

    Archives are recognised by a ".zip" file name suffix (any case).
    """
    name = filename or "ccdaFile"
    if name.lower().endswith(ZIP_SUFFIX):
        return ZipDocument(name, stream, max_bytes)
    return UploadedDocument(name, stream, max_bytes)
