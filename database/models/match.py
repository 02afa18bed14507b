import uuid

from sqlalchemy import (
    Column, Text, TIMESTAMP, ForeignKey, Integer, UniqueConstraint, Index, Uuid, func,
)

from .base import Base, JSONType


class CandidateMatchScore(Base):
    """
    Stores the latest score of a candidate against a requirement.

    Exactly one row per (candidate, requirement); recalculation
    overwrites it in place.
    """
    __tablename__ = 'candidate_match_score'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)
    requirement_id = Column(Integer, ForeignKey('requirement.id', ondelete='CASCADE'), nullable=False)

    score = Column(Integer, nullable=False)
    matching_skills = Column(JSONType, default=list)
    matching_points = Column(JSONType, default=list)
    gaps = Column(JSONType, default=list)
    experience_match_level = Column(Text, nullable=True)
    recommendation = Column(Text, nullable=False)
    analysis = Column(JSONType, default=dict)

    tier = Column(Text, nullable=False, default='rule_based')
    model_name = Column(Text, nullable=True)

    calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('candidate_id', 'requirement_id', name='uq_candidate_match_score_pair'),
        Index('idx_candidate_match_score_requirement', 'requirement_id'),
        Index('idx_candidate_match_score_score', 'score'),
    )
