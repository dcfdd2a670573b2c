"""
Facet extraction from NetEase song wiki summaries.

The wiki summary endpoint returns a list of loosely structured "blocks".
The block whose code is SONG_PLAY_ABOUT_SONG_BASIC holds a list of
"creatives", each tagged with a creativeType:

    {
      "code": 200,
      "data": {
        "blocks": [
          {
            "code": "SONG_PLAY_ABOUT_SONG_BASIC",
            "creatives": [
              {"creativeType": "songTag",
               "resources": [{"uiElement": {"mainTitle": {"title": "流行"}}}]},
              {"creativeType": "songBizTag",
               "resources": [{"uiElement": {"mainTitle": {"title": "KTV"}}}]},
              {"creativeType": "language",
               "uiElement": {"textLinks": [{"text": "国语"}]}},
              {"creativeType": "bpm",
               "uiElement": {"textLinks": [{"text": "120"}]}}
            ]
          }
        ]
      }
    }

Extraction never raises on malformed input. Each path is decoded by a
small helper that returns a typed value or a documented fallback:

    - missing basic block, or block without a creatives list -> no record
    - resource without a string title                        -> resource skipped
    - language creative without text                         -> ''
    - bpm creative without text or with unparsable text      -> None
    - unknown creativeType                                   -> ignored
"""

import re
from typing import Any, Callable

from playlist_facets.facets.models import FacetRecord


BASIC_BLOCK_CODE = "SONG_PLAY_ABOUT_SONG_BASIC"

CREATIVE_STYLES = "songTag"
CREATIVE_TAGS = "songBizTag"
CREATIVE_LANGUAGE = "language"
CREATIVE_BPM = "bpm"

# Leading integer, as read by a lenient integer parser ("128 BPM" -> 128)
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_bpm(text: str | None) -> int | None:
    """
    Parse the BPM text of a bpm creative.

    Reads the leading integer of the text; trailing characters are
    ignored.

    Examples:
        parse_bpm("120")      # 120
        parse_bpm(" 98 BPM")  # 98
        parse_bpm("abc")      # None
        parse_bpm(None)       # None
    """
    if not isinstance(text, str):
        return None
    match = _LEADING_INT_PATTERN.match(text)
    if match is None:
        return None
    return int(match.group(1))


def _find_basic_block(response: Any) -> dict[str, Any] | None:
    """Return the basic-info block of a wiki summary response, if any."""
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    blocks = data.get("blocks")
    if not isinstance(blocks, list):
        return None

    for block in blocks:
        if isinstance(block, dict) and block.get("code") == BASIC_BLOCK_CODE:
            return block
    return None


def _resource_titles(creative: dict[str, Any]) -> tuple[str, ...]:
    """Unique resource titles of a creative (uiElement.mainTitle.title), in order."""
    resources = creative.get("resources")
    if not isinstance(resources, list):
        return ()

    titles: list[str] = []
    for resource in resources:
        title = _dig(resource, "uiElement", "mainTitle", "title")
        if isinstance(title, str) and title:
            titles.append(title)
    return tuple(dict.fromkeys(titles))


def _first_text_link(creative: dict[str, Any]) -> str | None:
    """Text of the creative's first text link (uiElement.textLinks[0].text)."""
    links = _dig(creative, "uiElement", "textLinks")
    if not isinstance(links, list) or not links:
        return None
    first = links[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) else None


def _dig(value: Any, *keys: str) -> Any:
    """Follow a chain of mapping keys, returning None at the first gap."""
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def extract_facet(
    track_id: int,
    track_name: str,
    response: Any
) -> FacetRecord | None:
    """
    Extract the facet record of one track from its wiki summary.

    Pure function of its input.

    Args:
        track_id: ID of the track the response belongs to.
        track_name: Name of the track, copied into the record.
        response: Decoded JSON body of /song/wiki/summary.

    Returns:
        FacetRecord, or None when the basic-info block is missing or has
        no creatives list.
    """
    block = _find_basic_block(response)
    if block is None:
        return None

    creatives = block.get("creatives")
    if not isinstance(creatives, list):
        return None

    fields: dict[str, Any] = {
        "styles": (),
        "tags": (),
        "language": "",
        "bpm": None,
    }

    for creative in creatives:
        if not isinstance(creative, dict):
            continue
        creative_type = creative.get("creativeType")
        if not isinstance(creative_type, str):
            continue
        handler = _CREATIVE_HANDLERS.get(creative_type)
        if handler is not None:
            name, value = handler(creative)
            fields[name] = value

    return FacetRecord(track_id=track_id, track_name=track_name, **fields)


_CREATIVE_HANDLERS: dict[str, Callable[[dict[str, Any]], tuple[str, Any]]] = {
    CREATIVE_STYLES: lambda c: ("styles", _resource_titles(c)),
    CREATIVE_TAGS: lambda c: ("tags", _resource_titles(c)),
    CREATIVE_LANGUAGE: lambda c: ("language", _first_text_link(c) or ""),
    CREATIVE_BPM: lambda c: ("bpm", parse_bpm(_first_text_link(c))),
}
