from __future__ import annotations

import argparse
from typing import List, Optional

from deploykit.config import load_config
from deploykit.core.colors import error
from deploykit.core.guard import run_guarded
from deploykit.deploy import run_deploy
from deploykit.environment import CiEnvironment
from deploykit.webhook import DEFAULT_TIMEOUT


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="deploykit deploy",
        description="Trigger a deployment of the current image through the deploy webhook.",
    )
    p.add_argument(
        "environment", help="Environment key from deploykit.yml, e.g. staging."
    )
    p.add_argument("--config", help="Path to deploykit.yml.")
    p.add_argument(
        "--endpoint", help="Deploy webhook URL (default: $DEPLOY_ENDPOINT)."
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT}).",
    )
    p.add_argument(
        "--fail-on-status",
        action="store_true",
        help="Fail when the endpoint answers with a 4xx/5xx status.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the form that would be posted, token masked.",
    )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    env = CiEnvironment.from_env()

    endpoint = args.endpoint or env.deploy_endpoint
    if not endpoint and not args.dry_run:
        error("No deploy endpoint: pass --endpoint or set DEPLOY_ENDPOINT")
        return 2

    def _job() -> None:
        target = load_config(args.config).environment(args.environment)
        run_deploy(
            env,
            target,
            endpoint or "<DEPLOY_ENDPOINT unset>",
            timeout=args.timeout,
            fail_on_status=args.fail_on_status,
            dry_run=args.dry_run,
        )

    return run_guarded(_job)


if __name__ == "__main__":
    raise SystemExit(main())
