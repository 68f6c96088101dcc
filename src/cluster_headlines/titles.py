"""Resolve short human-readable labels for clusters."""

from __future__ import annotations

import logging
import re

from cluster_headlines.models import Cluster
from common.similarity import cosine_similarity, mean_embedding

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

ATTRIBUTION_SUBJECTS = (
    r"(?:officials?|police|authorities|sources|ministry|government|spokes(?:person|man|woman)"
    r"|media|experts?|analysts?|witnesses|reports?)"
)

ATTRIBUTION_RE = re.compile(
    r"(?:[,;]\s*|\s+[-–—]\s+|\s+)"
    r"(?:according\s+to\b.*"
    r"|(?:said|says|say|reported)\s+(?:\w+\s+){0,2}?" + ATTRIBUTION_SUBJECTS + r"\W*"
    r"|(?:the\s+)?(?:\w+\s+)?" + ATTRIBUTION_SUBJECTS + r"\s+(?:said|says|say|report|reported)\W*)$",
    re.IGNORECASE,
)

# A full stop after a capital letter is usually an abbreviation ("U.S.").
SENTENCE_END_RE = re.compile(r"(?<![A-Z])[.!?](?=\s|$)")

CLAUSE_SPLIT_RE = re.compile(r"\s*:\s+|\s+[-–—|]\s+")

CUT_WORDS = {
    "after", "ahead", "amid", "as", "because", "before", "despite", "during",
    "following", "over", "since", "until", "while", "with",
}

QUANTIFIERS = {
    "a", "about", "almost", "around", "at", "dozens", "few", "hundreds", "least",
    "many", "millions", "more", "nearly", "of", "over", "scores", "several",
    "some", "than", "thousands", "up", "to",
    "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "twenty", "hundred", "thousand", "million", "billion",
}

NUMBER_RE = re.compile(r"^[\d][\d,.]*[%+]?$")

MAGNITUDE_RE = re.compile(
    r"\bM\s?(\d\.\d)\b"
    r"|\b(\d(?:\.\d)?)[\s-](?i:magnitude)\b"
    r"|\b(?i:magnitude)[\s-](\d(?:\.\d)?)\b"
)

TRAILING_PUNCT = " ,;:-–—|\"'"


def _clean(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip(TRAILING_PUNCT)


def strip_attribution(text: str, min_words: int = 1) -> str:
    """Remove trailing "..., officials said" / "according to X" clauses.

    The text is returned unchanged when fewer than ``min_words`` would remain.
    """
    stripped = _clean(ATTRIBUTION_RE.sub("", text, count=1))
    if len(stripped.split()) < max(1, min_words):
        return text
    return stripped


def _first_sentence(text: str) -> str:
    match = SENTENCE_END_RE.search(text)
    if match and match.start() > 0:
        return text[: match.start()]
    return text


def _main_clause(text: str, min_words: int) -> str:
    parts = [_clean(p) for p in CLAUSE_SPLIT_RE.split(text) if _clean(p)]
    if not parts:
        return text
    for part in parts:
        if len(part.split()) >= min_words:
            return part
    return parts[0]


def _drop_leading_quantifiers(words: list[str]) -> list[str]:
    index = 0
    while index < len(words):
        token = words[index].lower().strip(",")
        if token in QUANTIFIERS or NUMBER_RE.match(token):
            index += 1
            continue
        break
    return words[index:] or words


def _cut_at_prepositions(words: list[str], min_words: int) -> list[str]:
    kept: list[str] = []
    for word in words:
        if len(kept) >= min_words and word.lower().strip(",") in CUT_WORDS:
            break
        kept.append(word)
    return kept


def extract_event_phrase(title: str, max_words: int = 8, min_phrase_words: int = 3) -> str:
    """Reduce a raw headline to a short event phrase.

    Attribution tails are stripped, then the text is cut at the first sentence
    end, at a colon/dash clause boundary and at a connecting preposition once
    ``min_phrase_words`` words are kept. Leading counts ("At least 12") are
    dropped and the result is capped at ``max_words`` with an ellipsis.
    """
    text = _clean(title)
    if not text:
        return text

    text = strip_attribution(text, min_phrase_words)
    text = _clean(_first_sentence(text))
    text = _main_clause(text, min_phrase_words)

    words = _drop_leading_quantifiers(text.split())
    words = _cut_at_prepositions(words, min_phrase_words)

    if len(words) > max_words:
        return " ".join(words[:max_words]).rstrip(TRAILING_PUNCT) + ELLIPSIS
    return _clean(" ".join(words))


def magnitude_of(title: str) -> float | None:
    """Return the magnitude value a headline carries, if any."""
    match = MAGNITUDE_RE.search(title or "")
    if not match:
        return None
    value = next(group for group in match.groups() if group is not None)
    return float(value)


def magnitude_label(titles: list[str]) -> str | None:
    """Label for a cluster whose headlines are mostly magnitude reports."""
    magnitudes = [m for m in (magnitude_of(t) for t in titles) if m is not None]
    if not titles or len(magnitudes) * 2 <= len(titles):
        return None
    return f"M{max(magnitudes):.1f} earthquake"


def representative_title(cluster: Cluster) -> str:
    """Title of the member closest to the cluster centroid."""
    centroid = cluster.centroid or mean_embedding(item.embedding for item in cluster.items)
    if centroid is None:
        return cluster.items[0].title

    best_title = cluster.items[0].title
    best_similarity = float("-inf")
    for item in cluster.items:
        if item.embedding is None:
            continue
        similarity = cosine_similarity(item.embedding, centroid)
        if similarity > best_similarity:
            best_title, best_similarity = item.title, similarity
    return best_title


def resolve_title(cluster: Cluster, max_words: int = 8, min_phrase_words: int = 3) -> str:
    label = magnitude_label([item.title for item in cluster.items])
    if label:
        return label
    return extract_event_phrase(representative_title(cluster), max_words, min_phrase_words) or cluster.title


def resolve_titles(clusters: list[Cluster], max_words: int = 8, min_phrase_words: int = 3) -> list[Cluster]:
    """Set each non-fallback cluster's title in place."""
    for cluster in clusters:
        if cluster.is_fallback:
            continue
        cluster.title = resolve_title(cluster, max_words, min_phrase_words)
        logger.debug("Cluster %s titled '%s'", cluster.id, cluster.title)
    return clusters
