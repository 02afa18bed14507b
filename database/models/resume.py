from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Resume(Base):
    """
    A candidate's stored resume.

    Structured sections are filled from the resume builder. Uploaded files
    are referenced by ``file_url`` and ``metadata.localPath``; once a file
    has been read its text is cached in ``metadata.content``.
    """
    __tablename__ = 'resume'

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    objective = Column(Text, nullable=True)
    skills = Column(JSONType, default=list)
    languages = Column(JSONType, default=list)
    certifications = Column(JSONType, default=list)
    projects = Column(JSONType, default=list)
    achievements = Column(JSONType, default=list)

    file_url = Column(Text, nullable=True)
    mime_type = Column(Text, nullable=True)
    is_default = Column(Boolean, default=False)
    resume_metadata = Column('metadata', JSONType, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="resumes")

    __table_args__ = (
        Index('idx_resume_candidate', 'candidate_id'),
    )
