import yaml
import os
from typing import List, Optional, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str
    echo: bool = False


class LlmConfig(BaseModel):
    """
    Generative model settings shared by the AI scoring tier and skill extraction.

    Any OpenAI-compatible endpoint works; the default is Gemini's.
    """
    enabled: bool = True
    base_url: Optional[str] = "https://generativelanguage.googleapis.com/v1beta/openai/"
    api_key: Optional[str] = None
    timeout_seconds: float = 60.0
    retry_attempts: int = 3

    # Tried in order; the first parseable answer wins
    scoring_models: List[str] = Field(default_factory=lambda: [
        "gemini-2.0-flash-lite",
        "gemini-2.0-flash",
        "gemini-flash-latest",
        "gemini-1.5-flash",
        "gemini-pro",
    ])
    scoring_temperature: float = 0.2  # Lower temperature for consistent scoring
    scoring_max_output_tokens: int = 2048

    skill_extraction_model: str = "gemini-2.0-flash"
    skill_extraction_temperature: float = 0.7
    skill_extraction_max_output_tokens: int = 1024


class ExtractionConfig(BaseModel):
    """Where uploaded resumes live and how hard to try reading them."""
    # Searched in order by file name when a stored path does not exist
    upload_dirs: List[str] = Field(default_factory=lambda: [
        "uploads/resumes",
        "server/uploads/resumes",
        "/tmp/uploads/resumes",
    ])
    min_scan_chars: int = 100  # byte-scan results shorter than this are discarded
    doc_scan_limit_bytes: int = 100_000
    max_resume_chars: int = 15_000  # resume text cap inside the scoring prompt


class ScorerWeights(BaseModel):
    """Rule-based factor weights; together with the quality bonuses they sum to 100."""
    skills: float = 45.0
    experience: float = 25.0
    salary: float = 10.0
    education: float = 5.0
    location: float = 8.0


class ScorerConfig(BaseModel):
    """
    Configuration for the rule-based scoring tier.
    """
    weights: ScorerWeights = Field(default_factory=ScorerWeights)

    # Profile quality bonus
    completeness_threshold: int = 80
    completeness_bonus: float = 4.0
    email_verified_bonus: float = 1.5
    phone_verified_bonus: float = 1.5

    # Share of a factor's weight earned when the requirement does not constrain it
    neutral_credit_ratio: float = 0.5
    # Share of the experience weight earned above the maximum
    over_max_ratio: float = 0.8


class BatchConfig(BaseModel):
    delay_seconds: float = 1.5  # pause between candidates


class SearchConfig(BaseModel):
    match_mode: Literal["any", "all"] = "any"
    default_limit: int = 50


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    database: DatabaseConfig
    llm: LlmConfig = Field(default_factory=LlmConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    scoring: ScorerConfig = Field(default_factory=ScorerConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another dir), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    # Allow env var override for LLM endpoint and key
    env_llm_base_url = os.environ.get("LLM_BASE_URL")
    if env_llm_base_url:
        if not data.get('llm'):
            data['llm'] = {}
        data['llm']['base_url'] = env_llm_base_url

    env_llm_api_key = os.environ.get("LLM_API_KEY") or os.environ.get("GEMINI_API_KEY")
    if env_llm_api_key:
        if not data.get('llm'):
            data['llm'] = {}
        data['llm']['api_key'] = env_llm_api_key

    # Comma-separated list of upload directories
    env_upload_dirs = os.environ.get("UPLOAD_DIRS")
    if env_upload_dirs:
        if not data.get('extraction'):
            data['extraction'] = {}
        data['extraction']['upload_dirs'] = [d.strip() for d in env_upload_dirs.split(",") if d.strip()]

    return AppConfig(**data)
