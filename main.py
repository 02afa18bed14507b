import sys
import json
import logging
import argparse

from tenacity import retry, stop_after_attempt, wait_fixed

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import MatchingError
from database.database import create_schema, init_engine
from pipeline.batch_scorer import BatchProgress

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2), reraise=True)
def init_db(database_url: str) -> None:
    """Create missing tables, retrying while the database comes up."""
    engine = init_engine(database_url)
    create_schema(engine)
    logger.info("Database schema ready")


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _print_progress(event: BatchProgress) -> None:
    if event.status == 'processing':
        logger.info(f"[{event.current}/{event.total}] Scoring candidate {event.candidate_id}...")
    elif event.status == 'completed':
        logger.info(f"[{event.current}/{event.total}] Candidate {event.candidate_id}: {event.score}")
    else:
        logger.warning(f"[{event.current}/{event.total}] Candidate {event.candidate_id} failed: {event.error}")


def _parse_overrides(items):
    """KEY=VALUE pairs -> dict (values stay strings; the criteria parser coerces them)."""
    overrides = {}
    for item in items or []:
        key, sep, value = item.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {item!r}")
        overrides[key.strip()] = value.strip()
    return overrides


def cmd_init_db(ctx: AppContext, args) -> int:
    init_db(ctx.config.database.url)
    return 0


def cmd_score(ctx: AppContext, args) -> int:
    result = ctx.ats_service.score_candidate(
        args.candidate, args.requirement, overrides=_parse_overrides(args.filter)
    )
    _print_json(result.to_dict())
    return 0


def cmd_batch(ctx: AppContext, args) -> int:
    report = ctx.ats_service.score_batch(args.candidates, args.requirement, on_progress=_print_progress)
    _print_json({
        'total': report.total,
        'successful': [
            {'candidate_id': r.candidate_id, 'score': r.score, 'recommendation': r.recommendation}
            for r in report.successful
        ],
        'errors': report.errors,
        'execution_time': round(report.execution_time, 2),
    })
    return 0 if not report.errors else 1


def cmd_show(ctx: AppContext, args) -> int:
    result = ctx.ats_service.get_score(args.candidate, args.requirement)
    if result is None:
        logger.warning(f"No score stored for candidate {args.candidate} / requirement {args.requirement}")
        return 1
    _print_json(result.to_dict())
    return 0


def cmd_search(ctx: AppContext, args) -> int:
    overrides = _parse_overrides(args.filter)
    query = ctx.ats_service.search_candidates(args.requirement, overrides)
    candidates = ctx.ats_service.find_candidates(
        args.requirement, overrides, limit=args.limit, offset=args.offset
    )
    _print_json({
        'matching_groups': query.group_names(),
        'match_mode': query.match_mode,
        'candidates': [
            {
                'id': c.id,
                'name': c.full_name,
                'headline': c.headline,
                'location': c.current_location,
                'experience_years': c.experience_years,
            }
            for c in candidates
        ],
    })
    return 0


def cmd_ranking(ctx: AppContext, args) -> int:
    results = ctx.ats_service.list_scores(args.requirement, min_score=args.min_score, limit=args.limit)
    _print_json([
        {
            'candidate_id': r.candidate_id,
            'score': r.score,
            'recommendation': r.recommendation,
            'tier': r.tier,
            'calculated_at': r.calculated_at,
        }
        for r in results
    ])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TalentScout candidate matching")
    parser.add_argument('--config', default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--log-level', default=None, help='Override the configured log level')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('init-db', help='Create database tables')
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser('score', help='Score one candidate against a requirement')
    p.add_argument('candidate', type=int)
    p.add_argument('requirement', type=int)
    p.add_argument('--filter', action='append', metavar='KEY=VALUE', help='Criteria override (repeatable)')
    p.set_defaults(func=cmd_score)

    p = sub.add_parser('batch', help='Score several candidates against a requirement')
    p.add_argument('requirement', type=int)
    p.add_argument('candidates', type=int, nargs='+')
    p.set_defaults(func=cmd_batch)

    p = sub.add_parser('show', help='Show the stored score for a pair')
    p.add_argument('candidate', type=int)
    p.add_argument('requirement', type=int)
    p.set_defaults(func=cmd_show)

    p = sub.add_parser('search', help='Find candidates for a requirement')
    p.add_argument('requirement', type=int)
    p.add_argument('--filter', action='append', metavar='KEY=VALUE', help='Search filter, e.g. filterSkillsExclude=PHP')
    p.add_argument('--limit', type=int, default=None)
    p.add_argument('--offset', type=int, default=0)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser('ranking', help='List stored scores for a requirement, best first')
    p.add_argument('requirement', type=int)
    p.add_argument('--min-score', type=int, default=None)
    p.add_argument('--limit', type=int, default=None)
    p.set_defaults(func=cmd_ranking)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    logging.getLogger().setLevel((args.log_level or config.logging.level).upper())

    # init-db binds the engine itself, with retries
    ctx = AppContext.build(config, bind_database=args.command != 'init-db')
    try:
        return args.func(ctx, args)
    except MatchingError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
