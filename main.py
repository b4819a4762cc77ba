import sys
import json
import logging
import argparse
from typing import List, Optional

from jobmatch.config_loader import load_config
from jobmatch.app_context import AppContext
from jobmatch.dto import MatchResult
from jobmatch.exceptions import MatchingError
from database.init_db import init_db

logger = logging.getLogger(__name__)


def _match_to_dict(match: MatchResult) -> dict:
    return {
        'match_id': match.match_id,
        'role_id': match.role_id,
        'role_name': match.role_name,
        'score': float(match.score),
        'matched_skills': match.matched_skills,
        'missing_skills': match.missing_skills,
        'computed_at': match.computed_at.isoformat() if match.computed_at else None,
        'resume_title': match.resume_title,
    }


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2))


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resume / job-role matching engine")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Override the configured log level (DEBUG, INFO, ...)')

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('init-db', help='Create the database tables')

    refresh = sub.add_parser('refresh', help='Recompute and store all matches of a resume')
    refresh.add_argument('resume_id', type=int)

    matches = sub.add_parser('matches', help='Show stored matches of a resume, best first')
    matches.add_argument('resume_id', type=int)

    stats = sub.add_parser('stats', help='Match count, average score and top matches of a resume')
    stats.add_argument('resume_id', type=int)
    stats.add_argument('--top', type=_positive_int, default=None, help='Number of top matches to show')

    user_stats = sub.add_parser('user-stats', help='Dashboard statistics across all resumes of a user')
    user_stats.add_argument('user_id', type=str)
    user_stats.add_argument('--top', type=_positive_int, default=None, help='Number of top matches to show')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    level = (args.log_level or config.logging.level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=config.logging.format)

    context = AppContext.build(config)
    matching_engine = context.matching_engine

    try:
        if args.command == 'init-db':
            init_db(context.engine)
        elif args.command == 'refresh':
            results = matching_engine.recompute(args.resume_id)
            logger.info(f"Refreshed {len(results)} matches for resume {args.resume_id}")
            _print_json([_match_to_dict(m) for m in results])
        elif args.command == 'matches':
            _print_json([_match_to_dict(m) for m in matching_engine.get_existing(args.resume_id)])
        elif args.command == 'stats':
            summary = matching_engine.summarize(args.resume_id, top_n=args.top)
            _print_json({
                'resume_id': summary.resume_id,
                'total_matches': summary.total_matches,
                'average_score': float(summary.average_score),
                'top_matches': [_match_to_dict(m) for m in summary.top_matches],
            })
        elif args.command == 'user-stats':
            summary = matching_engine.summarize_user(args.user_id, top_n=args.top)
            _print_json({
                'user_id': summary.user_id,
                'total_resumes': summary.total_resumes,
                'total_matches': summary.total_matches,
                'average_score': float(summary.average_score),
                'top_matches': [_match_to_dict(m) for m in summary.top_matches],
                'skill_distribution': [
                    {'skill_name': s.skill_name, 'count': s.count} for s in summary.skill_distribution
                ],
            })
    except MatchingError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
