"""
Phone number recognition and normalisation.

Customers' phone numbers are typed in free form: with or without the
``+90``/``90``/``0`` national prefixes, with spaces, next to names or
remarks such as ``Ahmet (kapıcı) 0534 682 22 82``.  The functions here
turn that text into the canonical storage form (digits only, leading
zero for national numbers) and into structured display segments.

Nothing in this module raises on odd input: when no phone number can
be recognised the caller gets back the cleaned digits or the original
text and decides what to do with it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List
from urllib.parse import quote


NON_DIGIT_RE = re.compile(r"\D")

# Recognised phone shapes, most specific first.
PHONE_PATTERNS = [
    re.compile(r"\+90\s*\d{3}\s*\d{3}\s*\d{2}\s*\d{2}"),  # +90 534 682 22 82
    re.compile(r"\+90\d{10}"),                          # +905346822282
    re.compile(r"90\d{10}"),                            # 905346822282
    re.compile(r"0\d{10}"),                             # 05346822282
    re.compile(r"\d{11}"),                              # 15346822282
]

# The display grammar also accepts grouped national numbers.
DISPLAY_PHONE_PATTERNS = PHONE_PATTERNS[:4] + [
    re.compile(r"0\d{3}\s*\d{3}\s*\d{2}\s*\d{2}"),  # 0534 682 22 82
    re.compile(r"0\d{3}\s*\d{3}\s*\d{4}"),          # 0534 682 2282
    PHONE_PATTERNS[4],
]

LOOSE_DIGITS_RE = re.compile(r"\d{10,11}")
PARENTHESIZED_RE = re.compile(r"(\([^)]*\))")

MARKER_RE = re.compile(r"//\s*\[\d+\]\s*")
LEADING_SLASHES_RE = re.compile(r"^//\s*")
TRAILING_SLASHES_RE = re.compile(r"\s*//\s*$")

STYLE_PHONE = "phone"
STYLE_ANNOTATION = "annotation"

WHATSAPP_SHARE_URL = "https://wa.me/"


@dataclass
class PhoneSegment:
    """A piece of raw phone input tagged with its display style."""

    text: str
    style: str


def normalize_for_storage(text: str) -> str:
    """Return the canonical digit-only form of ``text``.

    ``+90``/``90`` followed by ten digits becomes a leading ``0``, and a
    bare ten digit number gets a leading ``0``.  Sparse input is
    returned as whatever digits it contains.
    """
    if not text:
        return ""
    cleaned = NON_DIGIT_RE.sub("", text)
    if cleaned.startswith("90") and len(cleaned) >= 12:
        cleaned = "0" + cleaned[2:]
    if len(cleaned) == 10 and not cleaned.startswith("0"):
        cleaned = "0" + cleaned
    return cleaned


def extract_phone(text: str) -> str:
    """Find the first phone number in free-form ``text``.

    Returns the normalised number, or the normalised digit run when
    the text holds at least ten digits in total.  Otherwise ``text`` is
    returned unchanged, so the result is not guaranteed to be a phone
    number.
    """
    if not text:
        return ""
    for pattern in PHONE_PATTERNS:
        match = pattern.search(text)
        if match:
            return normalize_for_storage(match.group(0))
    digits = NON_DIGIT_RE.sub("", text)
    if len(digits) >= 10:
        return normalize_for_storage(digits)
    return text


def strip_annotation_markers(text: str) -> str:
    """Remove ``// [n]`` debris and stray leading/trailing ``//``."""
    if not text:
        return ""
    text = MARKER_RE.sub("", text)
    text = LEADING_SLASHES_RE.sub("", text)
    text = TRAILING_SLASHES_RE.sub("", text)
    return text.strip()


def cleaned_for_dialing(raw_input: str) -> str:
    """Digits to dial for ``raw_input``; safe to apply to its own output."""
    if not raw_input:
        return ""
    return normalize_for_storage(strip_annotation_markers(raw_input))


def build_dial_uri(raw_input: str) -> str:
    return f"tel:{cleaned_for_dialing(raw_input)}"


def build_share_text(address: str, phone: str) -> str:
    """Address and phone as one message for sharing or copying a job."""
    return f"{address or 'N/A'}\nTelefon: {phone or ''}"


def build_whatsapp_url(text: str) -> str:
    return f"{WHATSAPP_SHARE_URL}?text={quote(text, safe='')}"


def _normalize_match(match: re.Match) -> str:
    return normalize_for_storage(match.group(0))


def _highlight_phone_span(span: str) -> str:
    for pattern in DISPLAY_PHONE_PATTERNS:
        if pattern.search(span):
            return pattern.sub(_normalize_match, span)
    return LOOSE_DIGITS_RE.sub(_normalize_match, span)


def render_with_highlight(raw_input: str) -> List[PhoneSegment]:
    """Split raw phone input into display segments.

    Parenthesised spans are annotations and kept verbatim.  Every other
    span is tagged as phone text, with any recognised phone number in
    it replaced by its normalised form.
    """
    if not raw_input:
        return []
    segments: List[PhoneSegment] = []
    for part in PARENTHESIZED_RE.split(raw_input):
        if not part:
            continue
        if part.startswith("(") and part.endswith(")"):
            segments.append(PhoneSegment(text=part, style=STYLE_ANNOTATION))
        else:
            segments.append(PhoneSegment(text=_highlight_phone_span(part), style=STYLE_PHONE))
    return segments
