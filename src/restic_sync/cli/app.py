"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from restic_sync import ConfigError, RepositoryError, SyncError


def _log_level(*, verbose: bool) -> int:
    import restic_sync.cli as cli

    return cli.logging.DEBUG if verbose else cli.logging.INFO


def main(argv: list[str] | None = None) -> int:
    import restic_sync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    try:
        config = cli.resolve_config(config_path=args.config, overrides=cli._config_overrides(args))
        cli.logging.basicConfig(
            level=_log_level(verbose=args.verbose),
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            stream=sys.stderr,
        )
        if config.cron is not None:
            cli.asyncio.run(cli._run_scheduled(args, config))
        else:
            cli.asyncio.run(cli._run_sync(args, config))
        return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except RepositoryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except SyncError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
