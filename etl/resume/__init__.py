#!/usr/bin/env python3
"""
Resume Extraction Module - Resume files and resume text for scoring.

Handles:
- Text extraction from PDF, DOCX, DOC and plain text uploads
- Assembling the resume text handed to the scorer
"""
from etl.resume.extractor import DocumentExtractor, ExtractedDocument, normalize_whitespace
from etl.resume.content import (
    build_profile_resume_content,
    build_resume_content,
    resolve_resume_text,
)

__all__ = [
    'DocumentExtractor',
    'ExtractedDocument',
    'normalize_whitespace',
    'build_resume_content',
    'build_profile_resume_content',
    'resolve_resume_text',
]
