"""
Utility functions for the application.
"""
import re
import time

from typing import Any, Dict, Optional


def slugify_site_name(name: Optional[str], max_length: int = 50) -> str:
    """
    Lowercase, keep [a-z0-9-], collapse dashes and trim to max_length.

    Example:
        "Mon Produit Génial!" -> "mon-produit-g-nial"
    """
    safe = re.sub(r'[^a-z0-9-]', '-', (name or '').lower())
    safe = re.sub(r'-+', '-', safe).strip('-')
    return safe[:max_length] or "landing-page"


def unique_site_name(slug: Optional[str]) -> str:
    """Netlify site names are global, so suffix the slug with a millisecond timestamp."""
    return f"{slugify_site_name(slug)}-{int(time.time() * 1000)}"


def merge_dicts(*dicts: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Shallow merge; later dicts win and None entries are skipped."""
    merged: Dict[str, Any] = {}
    for d in dicts:
        if d:
            merged.update(d)
    return merged
