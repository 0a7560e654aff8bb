from __future__ import annotations

import argparse
import os
from typing import List, Optional

from deploykit.bootstrap import BUILD_DOCKERFILE, run_bootstrap
from deploykit.core.guard import run_guarded
from deploykit.environment import CiEnvironment


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="deploykit bootstrap",
        description="Build and push the per-branch build image used by build and test jobs.",
    )
    p.add_argument(
        "-f",
        "--file",
        default=BUILD_DOCKERFILE,
        dest="dockerfile",
        help=f"Dockerfile of the build image (default: {BUILD_DOCKERFILE}).",
    )
    p.add_argument(
        "--context", default=".", help="Docker build context (default: .)."
    )
    p.add_argument(
        "--no-push", action="store_true", help="Build the image but do not push it."
    )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    return run_guarded(
        lambda: run_bootstrap(
            CiEnvironment.from_env(),
            os.environ,
            dockerfile=args.dockerfile,
            context=args.context,
            push=not args.no_push,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
