"""
Skills Package - Canonical skill vocabulary and skill extraction.

Submodules:
- aliases: Canonical skill labels, alias lookup and skill-to-skill matching
- extractor: SkillExtractor (model first, alias scan fallback)
"""

from core.skills.aliases import (
    SKILL_ALIASES,
    canonical_skill,
    canonicalize_skills,
    mentions_skill,
    normalize_skill,
    prose_terms,
    scan_text_for_skills,
    skill_terms,
    skills_match,
)
from core.skills.extractor import SkillExtractor

__all__ = [
    'SKILL_ALIASES',
    'canonical_skill',
    'canonicalize_skills',
    'mentions_skill',
    'normalize_skill',
    'prose_terms',
    'scan_text_for_skills',
    'skill_terms',
    'skills_match',
    'SkillExtractor',
]
