"""Fixed Tesseract recognition profile applied to every OCR call."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Single uniform block of text.
PSM_SINGLE_BLOCK = 6
# LSTM neural net only.
OEM_LSTM_ONLY = 1

CHAR_WHITELIST = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
    ".,!?@#$%^&*()_+-=[]{}|;':,.<>?/~` "
)

_TUNING_VARIABLES = {
    "tessedit_char_whitelist": CHAR_WHITELIST,
    "tessedit_ocr_engine_mode": "1",
    "tessedit_pageseg_mode": "6",
    "classify_enable_learning": "0",
    "classify_enable_adaptive_matcher": "0",
    "textord_really_old_xheight": "1",
    "segment_penalty_dict_nonword": "1.25",
    "language_model_penalty_non_freq_dict_word": "0.1",
    "language_model_penalty_non_dict_word": "0.15",
}


@dataclass(frozen=True)
class RecognitionProfile:
    """Immutable engine settings: language, layout, engine mode and tuning variables."""

    language: str = "eng"
    page_seg_mode: int = PSM_SINGLE_BLOCK
    engine_mode: int = OEM_LSTM_ONLY
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(_TUNING_VARIABLES)))

    def __post_init__(self) -> None:
        if not isinstance(self.variables, MappingProxyType):
            object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @property
    def whitelist(self) -> str:
        return self.variables.get("tessedit_char_whitelist", "")

    def to_tesseract_config(self, variables: Mapping[str, str] | None = None) -> str:
        """Render the profile as a tesseract command-line config string.

        ``variables`` replaces the profile's own tuning variables, which lets a
        session render its private copy.
        """
        parts = [f"--oem {self.engine_mode}", f"--psm {self.page_seg_mode}"]
        for name, value in (self.variables if variables is None else variables).items():
            parts.append(f"-c {name}={shlex.quote(str(value))}")
        return " ".join(parts)


DEFAULT_PROFILE = RecognitionProfile()
