# SPDX-License-Identifier: Apache-2.0
"""File helpers that treat ``-`` as stdin/stdout."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator


@contextmanager
def open_input(path_or_dash: str) -> Iterator[BinaryIO]:
    """Yield a readable binary file-like for path or '-' (stdin) without closing stdin."""
    if path_or_dash == "-":
        yield sys.stdin.buffer
    else:
        with Path(path_or_dash).expanduser().open("rb") as f:
            yield f


@contextmanager
def open_output(path_or_dash: str) -> Iterator[BinaryIO]:
    """Yield a writable binary file-like for path or '-' (stdout).

    Parent directories of a file path are created on demand.
    """
    if path_or_dash == "-":
        yield sys.stdout.buffer
        sys.stdout.buffer.flush()
    else:
        out_path = Path(path_or_dash).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("wb") as f:
            yield f
