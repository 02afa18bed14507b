"""
Skill Extractor - Pull canonical skills out of resume text.

The generative model is asked for a JSON array first; when it is not
configured, fails, or answers with something other than a list of
strings, the alias table is scanned instead. Either way the result goes
through the same canonicalization so both paths agree on labels.
"""
import logging
from typing import List, Optional

from core.llm.interfaces import LLMProvider
from core.llm.json_parsing import extract_json_array
from core.llm.system_prompts import SKILL_EXTRACTION_PROMPT
from core.skills.aliases import canonicalize_skills, scan_text_for_skills

logger = logging.getLogger(__name__)


class SkillExtractor:
    """Free text -> ordered, de-duplicated canonical skill labels."""

    def __init__(
        self,
        llm: Optional[LLMProvider] = None,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: int = 1024,
        max_input_chars: int = 20000,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.max_input_chars = max_input_chars

    def extract_skills(self, text: Optional[str]) -> List[str]:
        """Extract skills from ``text``.

        Args:
            text: Resume or profile text

        Returns:
            Canonical skill labels in first-seen order; empty for empty text
        """
        if not text or not text.strip():
            return []

        if self.llm is not None:
            skills = self._extract_with_model(text)
            if skills is not None:
                return skills

        skills = scan_text_for_skills(text)
        logger.info(f"Alias scan found {len(skills)} skills")
        return skills

    def _extract_with_model(self, text: str) -> Optional[List[str]]:
        prompt = f"{SKILL_EXTRACTION_PROMPT}\n\nResume content:\n{text[:self.max_input_chars]}"
        try:
            response = self.llm.generate_text(
                prompt,
                model=self.model,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            )
            items = extract_json_array(response)
        except Exception as e:
            logger.warning(f"Model skill extraction failed, using alias scan: {e}")
            return None

        if not all(isinstance(item, str) for item in items):
            logger.warning("Model returned non-string skill entries, using alias scan")
            return None

        skills = canonicalize_skills(items)
        logger.info(f"Model extracted {len(skills)} skills")
        return skills
