"""Raw file reads shared by every format.

``read_raw`` and ``read_raw_async`` validate the path, check that a regular
file exists, and return the whole file decoded as text.  Both faces run
the same checks in the same order and raise the same errors; the async
face performs the blocking read in a worker thread.

Line endings are returned exactly as stored on disk.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from guarded_reader.core.errors import BlankPath, ContentDecodeError, FileNotFound

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8-sig"
DEFAULT_DECODE_ERRORS = "replace"


def check_path(path: str | None) -> str:
    """Return *path* unchanged, or raise :class:`BlankPath` if it is blank."""
    if path is None or not str(path).strip():
        raise BlankPath(details={"path": path})
    return str(path)


def _read_file(path: str, encoding: str, errors: str) -> str:
    if not Path(path).is_file():
        raise FileNotFound(f"File not found: {path}", details={"path": path})
    try:
        with open(path, encoding=encoding, errors=errors, newline="") as fh:
            content = fh.read()
    except FileNotFoundError as exc:
        # removed between the existence check and open()
        raise FileNotFound(f"File not found: {path}", details={"path": path}) from exc
    except UnicodeDecodeError as exc:
        raise ContentDecodeError(
            f"File content is not valid {encoding}: {path}",
            details={"path": path, "encoding": encoding, "offset": exc.start},
        ) from exc
    logger.debug("read %d characters from %s", len(content), path)
    return content


def read_raw(
    path: str | None,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_DECODE_ERRORS,
) -> str:
    """Read the whole file at *path* as text.

    Parameters
    ----------
    path:
        Path of the file to read.
    encoding:
        Codec used to decode the file bytes.
    errors:
        Codec error handler: ``"replace"`` or ``"strict"``.

    Returns
    -------
    str
        The complete file content.

    Raises
    ------
    BlankPath
        If *path* is ``None``, empty or whitespace only.
    FileNotFound
        If no regular file exists at *path*.
    ContentDecodeError
        If *errors* is ``"strict"`` and the bytes are not valid in
        *encoding*.
    OSError
        Any other failure to open or read the file (e.g.
        :class:`PermissionError`) propagates unchanged; such errors are
        left to the caller.
    """
    return _read_file(check_path(path), encoding, errors)


async def read_raw_async(
    path: str | None,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_DECODE_ERRORS,
) -> str:
    """Awaitable face of :func:`read_raw` with the same contract.

    The path is validated before suspending; the file read itself runs
    via :func:`asyncio.to_thread` so the event loop is not blocked.
    """
    checked = check_path(path)
    return await asyncio.to_thread(_read_file, checked, encoding, errors)
