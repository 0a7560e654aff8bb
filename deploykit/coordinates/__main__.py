from __future__ import annotations

import argparse
import json
from typing import List, Optional

from deploykit.core.colors import error
from deploykit.coordinates import export_lines, resolve_image_coordinates
from deploykit.environment import CiEnvironment
from deploykit.errors import DeployKitError


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="deploykit coordinates",
        description="Print the image coordinate (repository:tag) of the current CI build.",
    )
    out = p.add_mutually_exclusive_group()
    out.add_argument(
        "--export",
        action="store_true",
        help="Print 'export CI_APPLICATION_*=...' lines for eval in a shell job.",
    )
    out.add_argument(
        "--json",
        action="store_true",
        help="Print repository, tag and reference as a JSON object.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail if a variable needed for the coordinate is empty.",
    )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        coords = resolve_image_coordinates(CiEnvironment.from_env(), strict=args.strict)
    except DeployKitError as e:
        error(str(e))
        return 1

    if args.export:
        print("\n".join(export_lines(coords)))
    elif args.json:
        payload = {
            "repository": coords.repository,
            "tag": coords.tag,
            "reference": coords.reference,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(coords.reference)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
