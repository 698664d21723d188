"""Entry point: ``python -m scoutwatch``.

Supports two modes:
  - ``python -m scoutwatch``       → Launch the FastAPI monitor server
  - ``python -m scoutwatch cli``   → Headless run against the simulated world
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scoutwatch agent monitor")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI monitor server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--agents", type=int, default=3)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run the monitor headless and print delivered messages")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=6000)
    cli.add_argument("--agents", type=int, default=3)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from scoutwatch.api.app import create_app
    from scoutwatch.config import MonitorConfig

    config = MonitorConfig(
        world_seed=args.seed,
        agent_count=args.agents,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from scoutwatch.config import MonitorConfig
    from scoutwatch.engine.context import MonitorContext
    from scoutwatch.engine.monitor_loop import MonitorLoop
    from scoutwatch.sim import build_world
    from scoutwatch.systems.clock import ManualClock
    from scoutwatch.utils.logging import setup_logging
    from scoutwatch.utils.notification_log import FanoutSink, LoggingSink, NotificationLog

    config = MonitorConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        agent_count=args.agents,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    # Simulated time: one tick duration per tick, independent of host speed
    clock = ManualClock()
    ctx = MonitorContext(config, clock)
    world = build_world(config)
    log = NotificationLog(maxlen=10_000)
    loop = MonitorLoop(ctx, world, FanoutSink(log, LoggingSink()), events=world)
    log.bind_tick_source(lambda: loop.tick)

    loop.run(after_tick=lambda _t: clock.advance(config.tick_duration_ms))

    stats = ctx.metrics.stats()
    logger.info(
        "Done. %d messages delivered, %d scan passes, %d errors, avg scan %.2fms",
        len(log), stats.updates, stats.errors, stats.avg_process_ms,
    )


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    match args.command:
        case "cli":
            _run_cli(args)
        case "serve":
            _run_server(args)
        case _:
            # No subcommand: serve with the serve defaults
            _run_server(parser.parse_args(["serve"]))


if __name__ == "__main__":
    main()
