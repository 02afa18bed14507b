from sqlalchemy import Column, Text, TIMESTAMP, Integer, Float, Index, func

from .base import Base, JSONType


class Requirement(Base):
    """
    A hiring requirement posted by an employer.

    Structured columns are authoritative when populated. The free-form
    ``metadata`` column carries whatever the posting form collected on top
    (exclusions, prose ranges, relocation flags) and is used as a fallback
    source for every criterion.
    """
    __tablename__ = 'requirement'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    skills = Column(JSONType, default=list)  # required
    key_skills = Column(JSONType, default=list)  # preferred

    experience_min = Column(Float, nullable=True)
    experience_max = Column(Float, nullable=True)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    currency = Column(Text, nullable=False, default='INR')

    candidate_locations = Column(JSONType, default=list)
    candidate_designations = Column(JSONType, default=list)
    education = Column(JSONType, default=list)
    notice_period = Column(Integer, nullable=True)  # max days
    diversity_preference = Column(JSONType, default=list)

    status = Column(Text, nullable=False, default='active')
    # "metadata" is reserved on declarative classes
    requirement_metadata = Column('metadata', JSONType, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_requirement_status', 'status'),
    )
