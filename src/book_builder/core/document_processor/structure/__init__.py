"""
Structural splitters built on the conversion contract.
"""

from .headed import HeadedDocument
from .sectioned import Section, SectionedList

__all__ = [
    "HeadedDocument",
    "Section",
    "SectionedList",
]
