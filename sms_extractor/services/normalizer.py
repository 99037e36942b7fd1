"""
Text normalization shared by every pipeline component
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

TOKEN_PATTERN = re.compile(r"\w+")


@dataclass(frozen=True)
class NormalizedText:
    text: str
    tokens: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.tokens


def normalize(text: Optional[str]) -> NormalizedText:
    """Lower-case, trim and tokenize on word-character runs"""
    if not text:
        return NormalizedText(text="", tokens=())

    lowered = text.strip().lower()
    return NormalizedText(text=lowered, tokens=tuple(TOKEN_PATTERN.findall(lowered)))
