"""
Command line entry point: print a playgroup's statistics as JSON.

Usage:
    python -m playgroup_stats.main <playgroup_id> [--report trends] [--window 30]
"""

import argparse
import asyncio
import json
import sys

from playgroup_stats.config import Config
from playgroup_stats.data_models.reports import report_to_dict
from playgroup_stats.data_models.settings import StatisticsSettings
from playgroup_stats.database.database import Database
from playgroup_stats.services.statistics import StatisticsService
from playgroup_stats.utils.exceptions import StatisticsError
from playgroup_stats.utils.logger import setup_logger

logger = setup_logger(__name__)

REPORTS = ('all', 'players', 'commanders', 'metrics', 'trends')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compute Commander playgroup statistics")
    parser.add_argument('playgroup_id', help="Playgroup id to report on")
    parser.add_argument('--report', choices=REPORTS, default='all', help="Which report to print")
    parser.add_argument('--window', type=int, default=None, help="Rolling win-rate window size")
    parser.add_argument('--partial-windows', action='store_true',
                        help="Emit trend points before a member reaches a full window")
    parser.add_argument('--months', type=int, default=None, help="Limit the histogram to the last N months")
    parser.add_argument('--database-url', default=None, help="Override DATABASE_URL")
    return parser.parse_args(argv)


async def run(args) -> dict:
    """Load the playgroup and compute the requested report"""
    settings = StatisticsSettings.from_config(
        trend_window_size=args.window,
        histogram_months=args.months,
        require_full_window=False if args.partial_windows else None,
    )
    
    db = Database(args.database_url)
    await db.initialize(create_tables=False)
    try:
        service = StatisticsService(db.session_factory, settings)
        if args.report == 'players':
            report = await service.get_player_statistics(args.playgroup_id)
        elif args.report == 'commanders':
            report = await service.get_commander_statistics(args.playgroup_id)
        elif args.report == 'metrics':
            report = await service.get_playgroup_metrics(args.playgroup_id)
        elif args.report == 'trends':
            report = await service.get_trends(args.playgroup_id)
        else:
            report = await service.get_playgroup_statistics(args.playgroup_id)
        return report_to_dict(report)
    finally:
        await db.close()


def main(argv=None) -> int:
    """Main entry point"""
    Config.validate()
    args = parse_args(argv)
    
    try:
        output = asyncio.run(run(args))
    except StatisticsError as e:
        logger.error(str(e))
        print(e.user_message, file=sys.stderr)
        return 1
    
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
