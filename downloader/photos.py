"""
Download the large2x variant of a photo and write it to the destination directory.
"""
import posixpath
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Union

import structlog

from .errors import StorageError
from .fetcher import HTTPFetcher
from .models import Photo

logger = structlog.get_logger(__name__)


def derive_filename(variant_url: str) -> str:
    """Last path segment of the URL, query string removed.

    >>> derive_filename("https://images.example.com/photos/42/pic.jpg?auto=compress")
    'pic.jpg'
    """
    path = variant_url.split('?', 1)[0]
    return posixpath.basename(path.rstrip('/'))


@contextmanager
def fetch_image(fetcher: HTTPFetcher, variant_url: str) -> Iterator[Iterator[bytes]]:
    """Open an unauthenticated download of the image and yield its byte chunks."""
    with fetcher.stream(variant_url) as chunks:
        yield chunks


def persist(chunks: Iterable[bytes], destination_dir: Union[str, Path], filename: str) -> Path:
    """Write all chunks to destination_dir/filename, overwriting any existing file."""
    full_path = Path(destination_dir) / filename

    try:
        f = open(full_path, 'wb')
    except OSError as e:
        raise StorageError(f"create file {full_path}: {e}", path=str(full_path)) from e

    try:
        with f:
            for chunk in chunks:
                f.write(chunk)
    except OSError as e:
        raise StorageError(f"write file {full_path}: {e}", path=str(full_path)) from e

    return full_path


def process_photo(fetcher: HTTPFetcher, photo: Photo, destination_dir: Union[str, Path]) -> Path:
    photo_url = photo.src.large2x
    name = derive_filename(photo_url)
    if not name:
        raise StorageError(f"cannot derive a file name for photo {photo.id}", url=photo_url)

    with fetch_image(fetcher, photo_url) as chunks:
        full_path = persist(chunks, destination_dir, name)

    logger.debug("photo_saved", photo_id=photo.id, url=photo_url, path=str(full_path))
    return full_path
