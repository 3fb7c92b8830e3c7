"""CLI interface for replaying recorded location sessions."""

import argparse
import json
import logging
import sys
from pathlib import Path

from geotrack.core.logging import configure_logging
from geotrack.replay.replay import read_session_file, replay_session

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the replay CLI."""
    parser = argparse.ArgumentParser(
        description="Replay a recorded location session through a tracking controller"
    )
    parser.add_argument(
        "--file", "-f", required=True, help="Path to a JSON session file to replay"
    )
    parser.add_argument(
        "--continuous",
        action="store_true",
        help="Force continuous updates instead of significant-change updates",
    )
    parser.add_argument(
        "--no-retain",
        action="store_true",
        help="Discard the last known location when tracking stops or fails",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Report verbose status text"
    )

    args = parser.parse_args()

    configure_logging(testing=True, level="debug" if args.verbose else None)

    try:
        file_path = Path(args.file)
        if not file_path.exists():
            logger.error(f"File not found: {args.file}")
            return 1

        session = read_session_file(str(file_path))
        if session is None:
            logger.error(f"Could not read session from {args.file}")
            return 1

        events = replay_session(
            session,
            force_continuous=args.continuous,
            keep_last_known=not args.no_retain,
            verbose=args.verbose,
        )
        for event in events:
            print(json.dumps(event))
        return 0

    except KeyboardInterrupt:
        logger.info("Replay interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
