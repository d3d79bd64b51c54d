"""Per-message feature extraction: words, emojis and media placeholders."""

from __future__ import annotations

import re

from chat_stats.stats.models import MediaCategory, MessageFeatures

MIN_WORD_LENGTH = 4

_NON_WORD_RE = re.compile(r"[^\w]")

# Single codepoints only: ZWJ sequences and skin-tone modifiers are counted
# by whichever of their codepoints fall inside these blocks.
_EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F680-\U0001F6FF"  # transport & map
    "\U0001F700-\U0001F77F"  # alchemical
    "\U0001F780-\U0001F7FF"  # geometric shapes extended
    "\U0001F800-\U0001F8FF"  # supplemental arrows-c
    "\U0001F900-\U0001F9FF"  # supplemental symbols & pictographs
    "\U0001FA00-\U0001FA6F"  # chess symbols
    "\U0001FA70-\U0001FAFF"  # symbols & pictographs extended-a
    "\u2600-\u26FF"  # misc symbols
    "\u2700-\u27BF"  # dingbats
    "]"
)

# Checked in order; the first category with a matching placeholder wins.
MEDIA_KEYWORDS: tuple[tuple[MediaCategory, tuple[str, ...]], ...] = (
    (MediaCategory.IMAGES, ("<Media omitted>", "image omitted", "IMG-", "image attached")),
    (MediaCategory.VIDEOS, ("video omitted", "Video omitted", "VID-", "video attached")),
    (MediaCategory.AUDIO, ("audio omitted", "Audio omitted", "audio attached", "voice message omitted")),
    (MediaCategory.DOCUMENTS, ("document omitted", "Document omitted", "file attached", "file omitted")),
)


def extract_words(body: str, min_length: int = MIN_WORD_LENGTH) -> list[str]:
    words = []
    for token in body.split():
        word = _NON_WORD_RE.sub("", token).lower()
        if len(word) >= min_length:
            words.append(word)
    return words


def extract_emojis(body: str) -> list[str]:
    return _EMOJI_RE.findall(body)


def classify_media(body: str) -> MediaCategory | None:
    for category, keywords in MEDIA_KEYWORDS:
        if any(keyword in body for keyword in keywords):
            return category
    return None


def extract_features(body: str, min_word_length: int = MIN_WORD_LENGTH) -> MessageFeatures:
    """Run every extractor over one message body."""
    return MessageFeatures(
        words=extract_words(body, min_word_length),
        emojis=extract_emojis(body),
        media=classify_media(body),
    )
