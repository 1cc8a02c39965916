"""Re-export database models used by session mixins."""

from subsentinel.db.models import Scan, Subdomain

__all__ = [
    "Scan",
    "Subdomain",
]
