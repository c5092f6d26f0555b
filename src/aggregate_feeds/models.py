"""Data models for the aggregate_feeds pipeline."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Article:
    """Latest entry of one feed, with its date normalized for display."""
    source_name: str
    title: str
    link: str
    published_display: str
    domain_name: Optional[str] = None
