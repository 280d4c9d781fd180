"""
File utilities for the pdf2cad assembler.

Provides functions for output path handling and atomic file replacement.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO, Union


def ensure_directory(path: Union[str, Path]) -> None:
    """
    Create directory if it doesn't exist, including parent directories.

    Args:
        path: Directory path to create

    Raises:
        OSError: If directory creation fails
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OSError(f"Failed to create directory {path}: {e}") from e


@contextmanager
def atomic_text_writer(
    output_path: Union[str, Path], encoding: str = "ascii"
) -> Iterator[TextIO]:
    """
    Open a temporary file next to output_path and move it into place on success.

    The destination only appears once the block completes without error.
    On any exception the temporary file is removed and the exception
    propagates, so no partial output is left behind.

    Args:
        output_path: Final destination path
        encoding: Text encoding of the written file

    Yields:
        Writable text stream

    Raises:
        OSError: If the directory, temporary file, or replacement fails
    """
    output_path = Path(output_path)
    ensure_directory(output_path.parent)

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as tmp_file:
            yield tmp_file
            tmp_file.flush()
        tmp_path.replace(output_path)
    except BaseException:
        # Clean up temp file on error
        if tmp_path.exists():
            tmp_path.unlink()
        raise
