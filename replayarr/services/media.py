"""Condensed-game media selection.

Finds the condensed-game item in a game's media feed and picks one
playable reference for it: a direct video file if there is one,
otherwise an embeddable player URL, otherwise the configured fallback.
"""

import re
from collections.abc import Iterable, Sequence

from replayarr.config import get_fallback_embed_url
from replayarr.core.types import MediaItem, Playback, ResolvedMedia

CONDENSED_MARKER = "condensed"

# Playback name fragments, most preferred first
PREFERRED_PLAYBACKS = (
    "mp4avcadaptive",
    "mp4avchd",
    "mp4avc",
    "mp4",
    "http_cloud_mobile",
    "http_cloud_tablet",
)

_INSECURE_SCHEME = re.compile(r"^http://", re.IGNORECASE)


def normalize_url(url: str | None) -> str | None:
    """Upgrade an http:// prefix to https://; nothing else is changed."""
    if not isinstance(url, str):
        return None
    return _INSECURE_SCHEME.sub("https://", url, count=1)


def is_condensed_item(item: MediaItem | None) -> bool:
    """Whether an item looks like the condensed game.

    Upstream tagging is inconsistent, so any of type, playback type,
    title, headline, slug or a keyword value may carry the marker.
    """
    if item is None:
        return False

    fields = (item.type, item.media_playback_type, item.title, item.headline, item.slug)
    if any(CONDENSED_MARKER in value.lower() for value in fields if value):
        return True

    return any(CONDENSED_MARKER in keyword.lower() for keyword in item.keywords if keyword)


def find_condensed(items: Iterable[MediaItem]) -> MediaItem | None:
    """First condensed-game item in feed order."""
    return next((item for item in items if is_condensed_item(item)), None)


def pick_direct_url(playbacks: Sequence[Playback] | None) -> str | None:
    """Choose the best directly playable URL.

    Order: first preferred name with a URL, then the first URL ending
    in .mp4, then whatever the first playback has.
    """
    if not playbacks:
        return None

    for label in PREFERRED_PLAYBACKS:
        match = next(
            (p for p in playbacks if p.name and label in p.name.lower()),
            None,
        )
        if match and match.url:
            return normalize_url(match.url)

    direct_mp4 = next(
        (p for p in playbacks if p.url and p.url.lower().endswith(".mp4")),
        None,
    )
    if direct_mp4:
        return normalize_url(direct_mp4.url)

    return normalize_url(playbacks[0].url)


def pick_embed_url(playbacks: Sequence[Playback] | None) -> str | None:
    """First playback URL pointing at an iframe player."""
    for playback in playbacks or ():
        if playback.url and "iframe" in playback.url:
            return normalize_url(playback.url)
    return None


def resolve_media(item: MediaItem | None) -> ResolvedMedia:
    """Resolve a condensed item (or its absence) to one renderable reference.

    The result always carries exactly one of video_url / embed_url; a
    direct video wins over an embed, and the fallback embed fills in
    when neither exists.
    """
    if item is None:
        return ResolvedMedia(embed_url=get_fallback_embed_url())

    headline = item.headline or item.title or item.caption
    description = item.blurb or item.description or item.caption

    video_url = pick_direct_url(item.playbacks) or normalize_url(item.url)
    embed_url = None if video_url else (
        pick_embed_url(item.playbacks) or normalize_url(item.playback_url)
    )
    if not video_url and not embed_url:
        embed_url = get_fallback_embed_url()

    return ResolvedMedia(
        video_url=video_url,
        embed_url=embed_url,
        headline=headline,
        description=description,
    )
