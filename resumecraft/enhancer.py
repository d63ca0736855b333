"""AI enhancement of resume and cover-letter records.

Both enhancers take a loosely-shaped JSON record, build a prompt from whatever
fields are present, and return a new record with the prose fields replaced.
If anything goes wrong the original record is returned untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Protocol

from .generation import GenerationError
from .model import CLOSING_FALLBACK, SECTIONS
from .prompt_templates import (
    COVER_LETTER_SYSTEM_PROMPT,
    RESUME_SYSTEM_PROMPT,
    render_cover_letter_prompt,
    render_resume_prompt,
)

logger = logging.getLogger(__name__)

# Matches "Experience:", "2) Skills." etc. Both groups are kept by re.split.
SECTION_LABEL_RE = re.compile(
    r"(\d+\)|\b)(" + "|".join(SECTIONS) + r")[:.]",
    re.IGNORECASE,
)


class Generator(Protocol):
    def generate(self, system_prompt: str, user_prompt: str) -> str: ...


def split_sections(text: str) -> List[str]:
    return SECTION_LABEL_RE.split(text)


def find_section(pieces: List[str], name: str) -> str:
    """Return the fragment following the first fragment that mentions `name`.

    Best effort only: a section name used inside another section's body text
    wins if it comes first.
    """
    needle = name.lower()
    for i, piece in enumerate(pieces[:-1]):
        if piece and needle in piece.lower():
            return (pieces[i + 1] or "").strip()
    return ""


def parse_sections(text: str) -> Dict[str, str]:
    """Split generated cover-letter text into {section name: content}."""
    pieces = split_sections(text)
    return {name: find_section(pieces, name) for name in SECTIONS}


class DocumentEnhancer:
    def __init__(self, generator: Generator):
        self.generator = generator

    def enhance_resume(self, record: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("enhance.start kind=resume has_summary=%s", bool(record.get("summary")))
        try:
            prompt = render_resume_prompt(record)
            summary = self.generator.generate(RESUME_SYSTEM_PROMPT, prompt)
        except GenerationError:
            logger.warning("enhance.failure kind=resume; returning original record")
            return record
        except Exception:
            logger.exception("enhance.failure kind=resume; returning original record")
            return record

        logger.info("enhance.success kind=resume")
        return {**record, "summary": summary}

    def enhance_cover_letter(self, record: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("enhance.start kind=cover_letter")
        try:
            prompt = render_cover_letter_prompt(record)
            generated = self.generator.generate(COVER_LETTER_SYSTEM_PROMPT, prompt)
            parsed = parse_sections(generated)
        except GenerationError:
            logger.warning("enhance.failure kind=cover_letter; returning original record")
            return record
        except Exception:
            logger.exception("enhance.failure kind=cover_letter; returning original record")
            return record

        missing = [name for name, content in parsed.items() if not content]
        if missing:
            logger.info("enhance.parse_mismatch kind=cover_letter missing=%s", ",".join(missing))

        enhanced = dict(record)
        for name in SECTIONS:
            key = name.lower()
            fallback = CLOSING_FALLBACK if key == "closing" else ""
            enhanced[key] = parsed[name] or record.get(key) or fallback
        logger.info("enhance.success kind=cover_letter")
        return enhanced
