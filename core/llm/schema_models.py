"""
Pydantic models for structured model responses.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ATSAssessment(BaseModel):
    """Shape of the JSON object the scoring prompt asks for.

    Only ``ats_score`` is mandatory; everything else degrades to empty.
    """
    model_config = ConfigDict(extra="ignore")

    ats_score: float = Field(..., ge=0, le=100)
    matching_skills: List[str] = Field(default_factory=list)
    matching_points: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    experience_match: Optional[str] = None
    skills_match_percentage: Optional[float] = None
    project_quality: Optional[str] = None
    education_level: Optional[str] = None
    overall_assessment: Optional[str] = None
    recommendation: Optional[str] = None
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
