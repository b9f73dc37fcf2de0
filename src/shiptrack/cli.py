# src/shiptrack/cli.py
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

import requests

from .api.carriers import UnsupportedCarrierError
from .api.xml import TrackResponseError
from .config.env import EnvError, get_app_env
from .config.loader import ConfigError, load_config
from .config.logging_config import get_logger
from .io.paths import derive_run_paths
from .models import Carrier
from .pipelines.tracking_run import TrackingRun
from .report.reporter import Reporter
from .report.styles import Palette


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shiptrack",
        description="Query carrier tracking APIs for the numbers in tracking.yml and print a status report.",
    )
    p.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to the YAML config. Default: ./tracking.yml, ./tracking.yaml, ~/.config/shiptrack/tracking.yml",
    )
    p.add_argument(
        "--carrier",
        default=Carrier.USPS.name.lower(),
        help="Carrier to query (usps). Default: usps",
    )
    p.add_argument(
        "--replay-file",
        type=Path,
        default=None,
        help="Read the carrier response from this file instead of calling the API.",
    )
    p.add_argument(
        "--reference-date",
        type=str,
        default=None,
        help="YYYY-MM-DD to treat as 'today'. Default: the local date.",
    )
    p.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors.",
    )
    p.add_argument(
        "--quiet-banner",
        action="store_true",
        help="Do not print the start-of-run banner.",
    )
    p.add_argument(
        "--no-console",
        action="store_true",
        help="Disable console logging (file logging remains).",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Default: LOG_LEVEL env, else INFO",
    )
    p.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path. Default: next to the config file with a .log suffix.",
    )
    p.add_argument(
        "--strict-env",
        action="store_true",
        help="Require USPS_USERNAME to be present in the environment; otherwise exit 2.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config_path, log_path = derive_run_paths(args.config, args.log_file)
    except FileNotFoundError as e:
        print(f"error: config file not found: {e}", file=sys.stderr)
        return 2

    logger = get_logger(
        "shiptrack",
        level=args.log_level,
        console=not args.no_console,
        log_file=log_path,
    )
    logger.debug("Logger initialized.")
    logger.info("Config: %s", config_path)
    logger.info("Log file: %s", log_path)

    try:
        env_cfg = get_app_env(dotenv_path=None, strict=args.strict_env)
        config = load_config(config_path, env_cfg=env_cfg)
    except EnvError as e:
        logger.error("Environment error: %s", e)
        return 2
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 2

    today = None
    if args.reference_date:
        try:
            today = date.fromisoformat(args.reference_date)
        except ValueError:
            logger.error(
                "Invalid --reference-date: %s (expected YYYY-MM-DD)", args.reference_date)
            return 2

    transport = None
    if args.replay_file:
        from .api.transport import ReplayTransport

        try:
            transport = ReplayTransport(args.replay_file)
        except ValueError as e:
            logger.error("Replay error: %s", e)
            return 2
        logger.info("Replay mode enabled: %s", args.replay_file)

    reporter = Reporter(
        sys.stdout,
        palette=Palette.for_stream(sys.stdout, force=False if args.no_color else None),
        today=today,
        banner=not args.quiet_banner,
    )

    try:
        run = TrackingRun(
            logger,
            config,
            carrier=args.carrier,
            transport=transport,
            reporter=reporter,
        )
    except UnsupportedCarrierError as e:
        logger.error("%s", e)
        return 2

    try:
        run.run()
    except requests.RequestException as e:
        logger.error("Tracking request failed: %s", e)
        return 1
    except TrackResponseError as e:
        logger.error("%s", e)
        return 1
    except Exception as e:
        logger.exception("Tracking run failed: %s", e)
        return 1

    logger.info("Done.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
