from __future__ import annotations

import argparse
import os
from typing import List, Optional

from deploykit.config import load_config
from deploykit.core.guard import run_guarded
from deploykit.environment import CiEnvironment
from deploykit.image import run_image_build


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="deploykit image",
        description="Render the client config, then build and push the application image.",
    )
    p.add_argument("--config", help="Path to deploykit.yml.")
    p.add_argument(
        "--deploy-dir",
        help="Build output directory holding config.example.json (default from config).",
    )
    p.add_argument("-f", "--file", dest="dockerfile", help="Dockerfile to build.")
    p.add_argument("--context", default=".", help="Docker build context (default: .).")
    p.add_argument(
        "--no-client-config",
        action="store_true",
        help="Do not render config.json from config.example.json.",
    )
    p.add_argument(
        "--no-push", action="store_true", help="Build the image but do not push it."
    )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    def _job() -> None:
        run_image_build(
            CiEnvironment.from_env(),
            load_config(args.config),
            os.environ,
            deploy_dir=args.deploy_dir,
            dockerfile=args.dockerfile,
            context=args.context,
            client_config=not args.no_client_config,
            push=not args.no_push,
        )

    return run_guarded(_job)


if __name__ == "__main__":
    raise SystemExit(main())
