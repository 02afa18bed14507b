import logging
from dataclasses import dataclass
from typing import Optional

from core.ats_service import ATSService
from core.config_loader import AppConfig, LlmConfig
from core.llm.openai_service import OpenAIService
from core.scorer import RuleBasedScorer, ScorePersistence, ScoringEngine, build_model_strategies
from core.search import QueryCompiler
from core.skills import SkillExtractor
from database.database import init_engine
from etl.resume import DocumentExtractor

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code and provides a single source
    of truth for service instantiation. The LLM client is built once here
    and injected; DB access is obtained via talent_uow() per operation.
    """
    config: AppConfig
    ai_service: Optional[OpenAIService]
    skill_extractor: SkillExtractor
    document_extractor: DocumentExtractor
    scoring_engine: ScoringEngine
    ats_service: ATSService

    @classmethod
    def build(cls, config: AppConfig, bind_database: bool = True) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            bind_database: Bind the shared session factory to config.database.url

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        if bind_database:
            init_engine(config.database.url, echo=config.database.echo)

        # AI Service (None when disabled: rule-based scoring and alias scan only)
        ai_service = cls._build_ai_service(config.llm)

        skill_extractor = SkillExtractor(
            llm=ai_service,
            model=config.llm.skill_extraction_model,
            temperature=config.llm.skill_extraction_temperature,
            max_output_tokens=config.llm.skill_extraction_max_output_tokens,
        )

        document_extractor = DocumentExtractor(
            search_dirs=config.extraction.upload_dirs,
            min_scan_chars=config.extraction.min_scan_chars,
            doc_scan_limit_bytes=config.extraction.doc_scan_limit_bytes,
        )

        scoring_engine = ScoringEngine(
            strategies=build_model_strategies(ai_service, config.llm),
            rule_based=RuleBasedScorer(config.scoring, skill_extractor),
            max_resume_chars=config.extraction.max_resume_chars,
        )

        ats_service = ATSService(
            engine=scoring_engine,
            persistence=ScorePersistence(),
            extractor=document_extractor,
            compiler=QueryCompiler(match_mode=config.search.match_mode),
            batch_delay_seconds=config.batch.delay_seconds,
            default_limit=config.search.default_limit,
        )

        return cls(
            config=config,
            ai_service=ai_service,
            skill_extractor=skill_extractor,
            document_extractor=document_extractor,
            scoring_engine=scoring_engine,
            ats_service=ats_service,
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> Optional[OpenAIService]:
        """Build OpenAI service from LLM configuration."""
        if not llm_config.enabled:
            return None
        if not llm_config.api_key:
            logger.warning("No LLM API key configured; scoring falls back to rules and skills to the alias table")
            return None

        model_config = {
            'default_model': llm_config.scoring_models[0] if llm_config.scoring_models
            else llm_config.skill_extraction_model,
            'temperature': llm_config.scoring_temperature,
            'max_output_tokens': llm_config.scoring_max_output_tokens,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
            timeout_seconds=llm_config.timeout_seconds,
            retry_attempts=llm_config.retry_attempts,
        )
