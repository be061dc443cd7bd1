"""
models/category.py
------------------
Domain model for need categories.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    """A category a need can be filed under (e.g. food, clothing)."""
    name: str
    slug: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.name
