#!/usr/bin/env python3
"""
Main automation script for checking in to a flight.
Handles configuration, the retried check-in run and the email report.
"""
import sys
import argparse
import logging
from typing import List, Optional

from playwright.sync_api import sync_playwright

from checkin.artifacts import ArtifactCollector
from checkin.browser import BrowserSessionFactory, check_for_browser
from checkin.config import get_app_config, load_env_file, validate_config
from checkin.errors import ConfigurationError
from checkin.mail import EmailService, get_email_config
from checkin.orchestrator import RetryOrchestrator, RetryPolicy
from checkin.reporter import RunReporter
from checkin.steps import CheckInSteps
from checkin.utils import format_result_message, get_log_path, make_run_id, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Automate airline check-in for one traveler")
    parser.add_argument("--env-file", type=str, help="Path to a .env file (useful under cron)")
    parser.add_argument("--headless", dest="headless", action="store_true", default=None,
                        help="Run browser in headless mode")
    parser.add_argument("--headed", dest="headless", action="store_false",
                        help="Run browser with a visible window")
    parser.add_argument("--max-attempts", type=int, help="Maximum number of check-in attempts")
    parser.add_argument("--artifact-dir", type=str, help="Where to write page captures and the log")
    parser.add_argument("--log-file", type=str, help="Path to log file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        load_env_file(args.env_file)
        app_config = get_app_config()
    except ConfigurationError as e:
        setup_logging(verbose=args.verbose)
        logger.critical(str(e))
        return 1

    if args.max_attempts is not None:
        app_config["max_attempts"] = args.max_attempts
    if args.headless is not None:
        app_config["headless"] = args.headless
    if args.artifact_dir:
        app_config["artifact_dir"] = args.artifact_dir

    run_id = make_run_id()
    log_path = args.log_file or get_log_path(app_config["artifact_dir"], run_id)
    setup_logging(verbose=args.verbose, log_file=log_path)
    print(f"Logging to {log_path}")
    logger.info("Logging enabled")

    try:
        logger.debug("Checking if ENV variables are set")
        traveler = validate_config()
        policy = RetryPolicy(
            max_attempts=app_config["max_attempts"],
            base_delay=app_config["retry_delay"],
            retry_site_errors=app_config["retry_site_errors"],
        )
        policy.validate()
    except ConfigurationError as e:
        logger.critical(str(e))
        return 1

    email_service = EmailService(get_email_config())
    if email_service.is_configured():
        logger.info("Email service initialized")
    else:
        logger.warning("Email not configured, continuing without a report")

    steps = CheckInSteps(
        base_url=app_config["base_url"],
        settle_timeout=app_config["settle_timeout"],
        settle_dwell=app_config["settle_dwell"],
        error_timeout=app_config["error_timeout"],
    )
    collector = ArtifactCollector(app_config["artifact_dir"])
    reporter = RunReporter(traveler, sender=email_service, log_path=log_path)

    try:
        with sync_playwright() as p:
            try:
                check_for_browser(p)
            except ConfigurationError as e:
                logger.critical(str(e))
                return 1

            logger.info(f"Base URL: {app_config['base_url']}")
            logger.info(f"Headless mode: {app_config['headless']}")
            session_factory = BrowserSessionFactory(
                p,
                headless=app_config["headless"],
                slow_mo=app_config["slow_mo"],
                default_timeout=app_config["default_timeout"],
            )
            try:
                orchestrator = RetryOrchestrator(
                    credential=traveler,
                    steps=steps,
                    session_factory=session_factory,
                    collector=collector,
                    reporter=reporter,
                    policy=policy,
                    run_id=run_id,
                    viewport=app_config["viewport"],
                )
                context = orchestrator.run()
            finally:
                session_factory.close()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    logger.info(format_result_message(context, traveler))
    return 0 if context.success else 1


if __name__ == "__main__":
    sys.exit(main())
