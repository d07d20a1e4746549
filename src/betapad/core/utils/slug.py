"""Slug generation for resource identifiers"""

import re


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated slug from a file stem or resource name; 'resource' if empty."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or 'resource'
