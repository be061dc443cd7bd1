"""
models/need.py
--------------
Domain model for needs: donation/resource requests published by an organization.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from models.category import Category
from models.organization import BaseOrganization


class NeedStatus(str, Enum):
    """Publication state of a need. No transition rules are enforced."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass
class NeedImage:
    """
    An image attached to a need.

    Attributes:
        id: Database primary key (None for new records).
        need_id: The need this image belongs to.
        name: Display name of the image.
        url: Where the image is hosted.
    """
    need_id: int
    url: str
    name: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Need:
    """
    Represents a single need of an organization.

    Attributes:
        id: Database primary key (None for new records).
        category_id: Referenced category.
        organization_id: Owning organization.
        title: Short title, never blank once stored.
        description: Free text explaining the need.
        required_quantity: How many units are wanted.
        reached_quantity: How many units were already donated.
        due_date: Date after which the need is no longer relevant.
        unit: Unit of measure (e.g. 'kg', 'caixas').
        status: Publication state.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
        images: Images attached to the need, in insertion order.
        category: Embedded category, filled on read.
        organization: Embedded organization summary, filled on read.
    """
    category_id: int
    organization_id: int
    title: str
    description: Optional[str] = None
    required_quantity: Optional[int] = None
    reached_quantity: int = 0
    due_date: Optional[date] = None
    unit: Optional[str] = None
    status: NeedStatus = NeedStatus.ACTIVE
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    images: list[NeedImage] = field(default_factory=list)
    category: Optional[Category] = None
    organization: Optional[BaseOrganization] = None

    def __str__(self) -> str:
        target = f"{self.reached_quantity}/{self.required_quantity} {self.unit or ''}".strip()
        return f"#{self.id} {self.title} | {target} | {NeedStatus(self.status).value}"
