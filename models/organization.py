"""
models/organization.py
----------------------
Summary view of an organization, as embedded in a need.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class BaseOrganization:
    """
    Public subset of an organization's record (no credentials, no address).

    Attributes:
        id: Database primary key.
        name: Display name.
        slug: URL-friendly identifier.
        logo: Logo URL.
        phone: Contact phone.
        about: Short presentation text.
        video: Presentation video URL.
        email: Contact e-mail.
    """
    name: str
    slug: str
    id: Optional[int] = None
    logo: Optional[str] = None
    phone: Optional[str] = None
    about: Optional[str] = None
    video: Optional[str] = None
    email: Optional[str] = None
