# app/domain/pagination.py
from __future__ import annotations

from typing import NamedTuple

from app.domain.errors import InvalidPageParameters

MAX_PAGE_SIZE = 100


class PageWindow(NamedTuple):
    skip: int
    limit: int


def _is_int(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def compute_window(page_number: int, page_size: int) -> PageWindow:
    """
    pageNumber (0-based) + pageSize -> (skip, limit).

    Halaman di luar jumlah data tetap valid; hasilnya kosong, bukan error.
    """
    if not _is_int(page_number) or page_number < 0:
        raise InvalidPageParameters(f"pageNumber must be an integer >= 0, got {page_number!r}")
    if not _is_int(page_size) or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise InvalidPageParameters(
            f"pageSize must be an integer between 1 and {MAX_PAGE_SIZE}, got {page_size!r}"
        )
    return PageWindow(skip=page_number * page_size, limit=page_size)
