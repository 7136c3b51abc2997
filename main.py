"""
reviewmatch - Common Reviewer Matching

CLI entry point: suggests friends or businesses for one Yelp user.
"""

import argparse
import logging
import sys

from reviewmatch.orchestrator import PipelineOrchestrator
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """
    Configure logging for the entire application.
    Logs go to stderr and the log file; stdout carries the CSV report.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="reviewmatch - friend and business suggestions from common reviewers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Users who rate businesses the way this user does
  python main.py Xqd0DzHaiyRqVH3WRG7hzg suggest_friends

  # Businesses this user has not reviewed, weighted by similar users
  python main.py Xqd0DzHaiyRqVH3WRG7hzg suggest_businesses \\
                 --output output/suggestions.csv
        """
    )

    parser.add_argument(
        "user_id",
        help="Target user id"
    )

    parser.add_argument(
        "action",
        choices=settings.ACTIONS,
        help="Which suggestions to print"
    )

    parser.add_argument(
        "--reviews-path",
        default=str(settings.REVIEWS_PATH),
        help=f"Review dump, .json or .json.gz (default: {settings.REVIEWS_PATH})"
    )

    parser.add_argument(
        "--output",
        help="Write the CSV report here instead of stdout"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        orchestrator = PipelineOrchestrator(reviews_path=args.reviews_path)
        report = orchestrator.run(user_id=args.user_id, action=args.action)
        orchestrator.report_writer.write(report, args.output)

        logger.info(f"reviewmatch completed successfully ({len(report)} rows)")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Logs go to stderr and reviewmatch.log, never stdout.
#    - stdout carries the CSV report and must stay parseable
#
# 2. One action per invocation, full recompute every run.
#    - No review index is persisted between runs
#    - Trade-off: each call rereads and re-aggregates the whole corpus
#
# 3. Exit codes: 0 on success, 1 on any pipeline failure or interrupt,
#    2 for argparse usage errors.
#    - The report is written only after the whole pipeline succeeds, so a
#      failed run leaves no partial output
