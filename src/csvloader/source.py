"""Source stream provider: local files and objects in Google Cloud Storage."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator

import fsspec

from csvloader.errors import StreamAcquisitionError

logger = logging.getLogger(__name__)

GCS_SOURCE = "gcs"


@dataclass(frozen=True)
class SourceLocation:
    """Either a bucket/path pair in object storage or a local file path."""

    kind: str
    path: str
    bucket: str = ""

    @classmethod
    def gcs(cls, bucket: str, path: str) -> "SourceLocation":
        return cls(kind=GCS_SOURCE, path=path, bucket=bucket)

    @classmethod
    def local(cls, path: str) -> "SourceLocation":
        return cls(kind="local", path=path)

    @property
    def url(self) -> str:
        if self.kind == GCS_SOURCE:
            return f"gcs://{self.bucket}/{self.path.lstrip('/')}"
        return self.path


def _open_gcs(bucket: str, path: str) -> BinaryIO:
    fs = fsspec.filesystem("gcs")
    return fs.open(f"{bucket}/{path.lstrip('/')}", "rb")


@contextmanager
def open_source(location: SourceLocation) -> Iterator[BinaryIO]:
    """Open the location as a binary stream, closing it on exit."""
    try:
        if location.kind == GCS_SOURCE:
            stream = _open_gcs(location.bucket, location.path)
        else:
            stream = open(location.path, "rb")
    except (OSError, ValueError, ImportError) as e:
        raise StreamAcquisitionError(f"cannot open {location.url}: {e}").wrap("open source") from e

    logger.info("Opened source %s", location.url)
    try:
        yield stream
    finally:
        stream.close()
