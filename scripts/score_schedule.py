"""
Command line entry point for the Tournament Schedule Scoring service.
Scores a schedule stored as JSON and prints the report.
"""

import sys
import argparse
import json
import logging
from datetime import datetime
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tournament_scoring.core.logging_config import setup_logging
from tournament_scoring.services.scorer import ScheduleScorer, schedule_from_payload


def main(argv=None):
    """
    Load a schedule file, score it and print the score report.
    """
    parser = argparse.ArgumentParser(
        description='Tournament Schedule Scoring - score a candidate schedule'
    )
    parser.add_argument(
        'schedule_file',
        help='Path to a JSON schedule (teams, team_assignments, unavailability_penalties)'
    )
    parser.add_argument(
        '--assert-incremental',
        action='store_true',
        help='Recompute the score from scratch and fail if the incremental score drifted'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    print("\n" + "=" * 80)
    print("TOURNAMENT SCHEDULE SCORING")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    try:
        with open(args.schedule_file, "r", encoding="utf-8") as f:
            payload = json.load(f)

        schedule = schedule_from_payload(payload)
        if not schedule.team_assignments:
            print("ERROR: No team assignments found in the schedule file.")
            return 1

        scorer = ScheduleScorer(assert_incremental_score=args.assert_incremental)
        print("\n" + scorer.generate_score_report(schedule))
        return 0

    except (OSError, ValueError) as e:
        print(f"\nERROR: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
