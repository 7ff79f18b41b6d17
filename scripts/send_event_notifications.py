"""Run one event notification batch; meant to be invoked by a scheduler."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from event_alerts.application.use_cases.notifications import run_event_notifications
from event_alerts.domain.exceptions import SourceUnavailableError
from event_alerts.infrastructure.database import initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the notification run."""

    parser = argparse.ArgumentParser(
        description="Notify users about upcoming events in the districts they follow.",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Override the current time (ISO 8601), mainly for testing.",
    )
    parser.add_argument(
        "--horizon-days",
        type=int,
        default=None,
        help="Days ahead of today to look for events (default: NOTIFICATION_HORIZON_DAYS).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser.parse_args()


def main() -> None:
    """Run the batch and print its summary as JSON."""

    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        initialize_database()
        summary = run_event_notifications(now=args.now, horizon_days=args.horizon_days)
    except (SourceUnavailableError, SQLAlchemyError) as exc:
        raise SystemExit(f"Notification run aborted: {exc}") from exc

    print(json.dumps({"success": True, **summary.as_dict()}))


if __name__ == "__main__":
    main()
