from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .engine import run_fields, run_parse, run_render
from .errors import LAMUserError
from .types import RunOptions
from .version import tool_version

_LOG = logging.getLogger("lam")

DEBUG_ENV = "LAM_DEBUG"


def _configure_logging() -> None:
    """
    Route the package's log records to stderr.

    Only warnings are shown unless LAM_DEBUG is set, in which case the
    parser, renderers and coalescer report their progress. Library code
    never installs handlers; this runs for the command line only.
    """
    _LOG.setLevel(logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING)
    if not _LOG.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lam",
        description="Legal Automator: merge answers into directive templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "template",
            help="template text file, or - to read from stdin",
        )
        sp.add_argument(
            "--coalesce-runs",
            action="store_true",
            help="join WordprocessingML text runs before scanning (for raw document.xml input)",
        )

    sp_parse = sub.add_parser("parse", help="JSON element tree of a template")
    add_common(sp_parse)

    sp_fields = sub.add_parser("fields", help="JSON questionnaire fields and default answers")
    add_common(sp_fields)

    sp_render = sub.add_parser("render", help="merged text")
    add_common(sp_render)
    sp_render.add_argument(
        "--answers",
        type=Path,
        metavar="FILE",
        help="answers in YAML or JSON (missing answers render empty)",
    )
    sp_render.add_argument(
        "--via-tree",
        action="store_true",
        help="render by walking the parsed tree instead of the raw text",
    )
    sp_render.add_argument(
        "--no-validate",
        action="store_true",
        help="skip full-template validation before rendering",
    )

    return p


def _opts(ns: argparse.Namespace) -> RunOptions:
    return RunOptions(
        coalesce_runs=bool(getattr(ns, "coalesce_runs", False)),
        validate=not bool(getattr(ns, "no_validate", False)),
        via_tree=bool(getattr(ns, "via_tree", False)),
    )


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "parse":
            report = run_parse(ns.template, _opts(ns))
            sys.stdout.write(report.model_dump_json() + "\n")
            return 0

        if ns.cmd == "fields":
            fields_report = run_fields(ns.template, _opts(ns))
            sys.stdout.write(fields_report.model_dump_json() + "\n")
            return 0

        if ns.cmd == "render":
            doc_text = run_render(ns.template, ns.answers, _opts(ns))
            sys.stdout.write(doc_text)
            return 0

    except LAMUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return e.exit_code

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
