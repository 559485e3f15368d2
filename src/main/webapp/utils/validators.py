"""Validation helpers for image uploads."""

from __future__ import annotations

from typing import AbstractSet

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp"})


def file_extension(filename: str) -> str:
    """Everything after the last dot of the final path element, lowercased.

    A dot-only name such as ``.png`` counts as having a ``png`` extension.
    """
    name = filename.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rpartition(".")[2].lower()


def is_valid_image_type(filename: str, allowed_extensions: AbstractSet[str] = IMAGE_EXTENSIONS) -> bool:
    """Case-insensitive extension check against the allow-list."""
    return file_extension(filename) in allowed_extensions
