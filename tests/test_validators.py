from __future__ import annotations

import pytest

from src.main.webapp.config import BaseConfig
from src.main.webapp.utils.validators import IMAGE_EXTENSIONS, is_valid_image_type


@pytest.mark.parametrize(
    "filename",
    ["a.png", "a.PNG", "photo.jpg", "photo.JpG", "scan.jpeg", "anim.gif", "old.BMP", "dir/with.dots/x.png", ".png", ".BMP"],
)
def test_accepts_image_extensions(filename):
    assert is_valid_image_type(filename)


@pytest.mark.parametrize(
    "filename",
    ["notes.txt", "doc.pdf", "noext", "", "archive.png.zip", "image.webp", "image.tiff", "png", "dir.png/noext"],
)
def test_rejects_other_extensions(filename):
    assert not is_valid_image_type(filename)


def test_config_allow_list_matches_validator_default():
    assert BaseConfig.ALLOWED_IMAGE_EXTENSIONS == IMAGE_EXTENSIONS


def test_config_form_cap_is_three_mebibytes():
    assert BaseConfig.MAX_CONTENT_LENGTH == 3 * 1024 * 1024
