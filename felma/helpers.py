# Felma Shared Helpers
# Utility functions used across all Felma apps

import logging
import re
from datetime import datetime, timezone

from .config import LOG_LEVEL, TITLE_MAX_LENGTH, UNTITLED

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_WHITESPACE = re.compile(r'\s+')


def configure_logging(level=LOG_LEVEL):
    """Configure root logging once; later calls are no-ops."""
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


def strip_markdown_json(content):
    """Strip markdown code blocks from Claude's JSON response"""
    content = content.strip()
    if content.startswith('```'):
        # Remove first line (```json or ```)
        content = content.split('\n', 1)[1] if '\n' in content else content[3:]
    if content.endswith('```'):
        content = content.rsplit('```', 1)[0]
    return content.strip()


def collapse_whitespace(text):
    """Collapse every run of whitespace to one space and trim the ends."""
    if not text:
        return ''
    return _WHITESPACE.sub(' ', str(text)).strip()


def display_title(title, content, limit=TITLE_MAX_LENGTH):
    """Pick the title shown for an item.

    Args:
        title: Human-chosen title, may be None or blank
        content: Free text of the item, used when there is no title
        limit: Maximum length of a title derived from content

    Returns:
        The trimmed title, else the first `limit` characters of the
        whitespace-collapsed content, else '(untitled)'
    """
    chosen = collapse_whitespace(title)
    if chosen:
        return chosen
    derived = collapse_whitespace(content)[:limit].rstrip()
    return derived or UNTITLED


def utc_now_iso():
    """Current UTC time as an ISO-8601 string (e.g. '2025-09-01T10:00:00.000000+00:00')"""
    return datetime.now(timezone.utc).isoformat()
