"""In-memory overlay archive packaging."""

from __future__ import annotations

import io
import zipfile
from typing import Iterable

from accentforge.errors import ArchiveWriteError
from accentforge.themes.models import ResourceDocument

# Fixed entry metadata keeps archives byte-identical across runs.
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)
ENTRY_PERMISSIONS = 0o644 << 16
_FINALIZE = "<central directory>"


def _entry_info(path: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(filename=path, date_time=ENTRY_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = ENTRY_PERMISSIONS
    info.create_system = 3
    return info


def package(documents: Iterable[ResourceDocument]) -> bytes:
    """Write ``documents`` as archive entries in order and return the zip bytes.

    Raises:
        ArchiveWriteError: on a duplicate entry path or any write failure.
    """
    buffer = io.BytesIO()
    seen: set[str] = set()
    current = _FINALIZE
    try:
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            for document in documents:
                current = document.path
                if document.path in seen:
                    raise ValueError(f"duplicate entry path {document.path!r}")
                seen.add(document.path)
                archive.writestr(_entry_info(document.path), document.encoded())
            current = _FINALIZE
    except Exception as exc:
        raise ArchiveWriteError(current, exc) from exc
    return buffer.getvalue()
