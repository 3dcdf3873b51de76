"""Parse creator recommendations out of free text.

A reply that is not valid JSON usually still lists creators as bullets under
a "Recommended Creators" heading, one creator per bullet:

    Recommended Creators:
    1. TechWithTim: In-depth gadget reviews
       with a loyal 25-34 audience.
    2. Sara Dietschy (1.2M) - creative tech vlogs

Free text rarely states subscriber or view counts reliably, so those are
synthesized from the creator name rather than extracted.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from pipeline.creator_metrics import estimate_average_views, subscriber_label_for
from schemas.campaign_plan import default_description

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(
    r"recommended(?:\s+youtube)?\s+creators:?"
    r"(.*?)"
    r"(?=campaign\s+name|video\s+ideas|tracking\s+metrics|keys\s+to\s+success|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_MARKER = r"(?:\d+\.|-|\*|•)"
_ENTRY_RE = re.compile(
    rf"(?:^|\n)[ \t]*{_MARKER}\s*([^\n]+(?:\n(?![ \t]*{_MARKER})[^\n]+)*)"
)
_NAME_RE = re.compile(r"^([^:,(\n]+)[:,(]")
_DESCRIPTION_LEAD_RE = re.compile(r"^[:\s,\-–*_]+")
_EMPHASIS_RE = re.compile(r"[*_`]+")

CHANNEL_URL_BASE = "https://youtube.com/c/"


def find_creator_section(text: str) -> Optional[str]:
    """Return the body of the 'Recommended Creators' section, if any."""
    match = _SECTION_RE.search(text)
    if match is None:
        return None
    return match.group(1)


def channel_url_for(name: str) -> str:
    return CHANNEL_URL_BASE + re.sub(r"\s+", "", name.lower())


def parse_creator_entry(entry: str) -> Optional[dict[str, Any]]:
    """Parse one bullet entry into a raw creator dict, or None if no name."""
    entry = entry.strip()
    match = _NAME_RE.match(entry)
    if match is None:
        return None
    name = _EMPHASIS_RE.sub("", match.group(1)).strip()
    if not name:
        return None

    description = _DESCRIPTION_LEAD_RE.sub("", entry[match.end():]).strip()
    description = " ".join(description.split())
    subscribers = subscriber_label_for(name)

    return {
        "name": name,
        "description": description or default_description(name),
        "channelUrl": channel_url_for(name),
        "subscribers": subscribers,
        "averageViews": estimate_average_views(subscribers),
    }


def extract_creators_from_text(text: Optional[str], require_section: bool = True) -> list[dict[str, Any]]:
    """Extract creators from a 'Recommended Creators' section of ``text``.

    With ``require_section=False`` the whole text is treated as the section
    body (used for a single category block). Entries without a name
    delimiter are skipped. Never raises.
    """
    if not text or not isinstance(text, str):
        return []

    if require_section:
        section = find_creator_section(text)
        if section is None:
            logger.debug("No recommended-creators section found")
            return []
    else:
        section = text

    creators = []
    for match in _ENTRY_RE.finditer(section):
        creator = parse_creator_entry(match.group(1))
        if creator is not None:
            creators.append(creator)

    logger.debug("Extracted %d creators from text", len(creators))
    return creators
