"""
floorfit — entry point.

Usage:
    python -m floorfit serve                   # start web server on :8000
    python -m floorfit serve --port 3000
    python -m floorfit calibrate lines.json    # print calibration as JSON
    python -m floorfit place job.json          # print placement report as JSON
    python -m floorfit place job.json --clearance 50

Add --verbose to any command for INFO logging on stderr.

lines.json is a list of reference lines (or {"lines": [...]}).  job.json
holds {"scale", "area", "fixtures", "existing"?, "clearance"?}; "scale"
may be replaced by "lines", in which case the job is calibrated first.
"""

import json
import logging
import sys
from pathlib import Path

USAGE = ("Usage: python -m floorfit serve [--port PORT] [--host HOST]\n"
         "       python -m floorfit calibrate LINES.json\n"
         "       python -m floorfit place JOB.json [--clearance MM]")


def _option(args, name, default=None):
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _read_json(path):
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _calibrate(data):
    from floorfit.calibration import calibrate, parse_reference_lines

    raw = data["lines"] if isinstance(data, dict) else data
    fallback = data.get("fallback_size") if isinstance(data, dict) else None
    return calibrate(parse_reference_lines(raw),
                     fallback_size=tuple(fallback) if fallback else None)


def _cmd_calibrate(args):
    from floorfit.calibration import calibration_to_dict

    cal = _calibrate(_read_json(args[1]))
    print(json.dumps(calibration_to_dict(cal), indent=2))
    return 0


def _cmd_place(args):
    from floorfit.calibration import parse_scale
    from floorfit.placer import (
        plan_placement, parse_area, parse_clearance, parse_fixture,
        parse_placed_fixture,
        report_to_dict,
    )

    job = _read_json(args[1])
    if "scale" in job:
        scale = parse_scale(job["scale"])
    else:
        scale = _calibrate(job).scale
        if scale is None:
            print("Could not calibrate: no usable reference lines.", file=sys.stderr)
            return 1

    clearance = _option(args, "--clearance", job.get("clearance"))
    report = plan_placement(
        parse_area(job["area"]),
        [parse_fixture(f) for f in job["fixtures"]],
        [parse_placed_fixture(p) for p in job.get("existing", [])],
        scale,
        clearance=parse_clearance(clearance),
    )
    print(json.dumps(report_to_dict(report), indent=2))
    return 0


def main():
    args = [a for a in sys.argv[1:] if a not in ("-v", "--verbose")]
    if len(args) != len(sys.argv[1:]):
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        port = int(_option(args, "--port", 8000))
        host = _option(args, "--host", "127.0.0.1")

        from floorfit.web.server import main as serve
        serve(host=host, port=port)
    elif cmd in ("calibrate", "place") and len(args) >= 2:
        handler = _cmd_calibrate if cmd == "calibrate" else _cmd_place
        try:
            code = handler(args)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            code = 1
        sys.exit(code)
    else:
        print(f"Unknown command: {cmd}")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
