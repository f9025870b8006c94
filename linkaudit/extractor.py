import logging
from typing import Optional

from bs4 import BeautifulSoup

from .parser import get_meta

logger = logging.getLogger(__name__)

# (slot, attribute the slot is keyed on); scan order decides which slot is "first"
METADATA_SLOTS: tuple[tuple[str, str], ...] = (
    ("description",         "name"),
    ("og:description",      "property"),
    ("twitter:description", "name"),
    ("keywords",            "name"),
    ("og:title",            "property"),
    ("twitter:title",       "name"),
)


def read_metadata(html: str) -> dict[str, Optional[str]]:
    """Content of every metadata slot, None where the tag is missing or empty."""
    soup = BeautifulSoup(html or "", "lxml")
    metadata = {}
    for slot, attribute in METADATA_SLOTS:
        if attribute == "name":
            metadata[slot] = get_meta(soup, name=slot)
        else:
            metadata[slot] = get_meta(soup, prop=slot)
    return metadata


def find_duplicate_descriptions(html: str) -> list[str]:
    """
    Report metadata slots whose content repeats an earlier slot.

    Each distinct content string is attributed to the first slot that carried
    it; every later slot with the same content yields one report:
        og:description duplicates with description: "Buy now"
    Reports follow slot scan order.
    """
    metadata = read_metadata(html)

    first_slot_by_content: dict[str, str] = {}
    duplicates = []
    for slot, _ in METADATA_SLOTS:
        content = metadata[slot]
        if not content:
            continue
        first_slot = first_slot_by_content.get(content)
        if first_slot is None:
            first_slot_by_content[content] = slot
        else:
            duplicates.append(f'{slot} duplicates with {first_slot}: "{content}"')

    if duplicates:
        logger.debug("Found %d duplicated metadata slots", len(duplicates))
    return duplicates
