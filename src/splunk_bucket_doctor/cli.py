"""Command line entrypoint for bucket discovery, scanning and recovery."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from splunk_bucket_doctor import __version__
from splunk_bucket_doctor.app import AppContext, get_app_context
from splunk_bucket_doctor.audit.export import write_csv, write_json
from splunk_bucket_doctor.audit.log import AuditLog
from splunk_bucket_doctor.discovery.indexes import discover_indexes
from splunk_bucket_doctor.discovery.scan import scan_index
from splunk_bucket_doctor.errors import BucketDoctorError
from splunk_bucket_doctor.logging_utils import configure_logging
from splunk_bucket_doctor.selection.loader import select_indexes

_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNRECOVERED = 1
EXIT_ERROR = 2


def cmd_indexes(args: argparse.Namespace, ctx: AppContext) -> int:
    indexes = discover_indexes(ctx.runner, ctx.commands)
    if not args.include_all:
        indexes = select_indexes(indexes, ctx.selection)
    for info in indexes:
        flags = [
            name for name, on in (("deleted", info.deleted), ("disabled", info.disabled)) if on
        ]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        print(f"{info.name}{suffix}\t{info.base_path or '-'}")
    return EXIT_OK


def cmd_scan(args: argparse.Namespace, ctx: AppContext) -> int:
    tasks = scan_index(ctx.runner, ctx.commands, args.index)
    for task in tasks:
        print(task.bucket_path)
    print(f"SCAN: {len(tasks)} corrupt bucket(s) in {args.index}")
    return EXIT_OK


def _recovery_targets(args: argparse.Namespace, ctx: AppContext) -> list[tuple[str, list[str]]]:
    if args.buckets:
        return [(args.index, list(args.buckets))]
    if args.all:
        discovered = discover_indexes(ctx.runner, ctx.commands)
        names = [info.name for info in select_indexes(discovered, ctx.selection)]
    else:
        names = [args.index]
    targets: list[tuple[str, list[str]]] = []
    for name in names:
        paths = [task.bucket_path for task in scan_index(ctx.runner, ctx.commands, name)]
        targets.append((name, paths))
    return targets


def cmd_recover(args: argparse.Namespace, ctx: AppContext) -> int:
    log = AuditLog()
    for index, bucket_paths in _recovery_targets(args, ctx):
        if not bucket_paths:
            _logger.info("No corrupt buckets in index %s", index)
            continue
        ctx.orchestrator.recover_index(index, bucket_paths, log)

    for record in log:
        status = "OK" if record.success else "FAIL"
        print(f"[{status}] step {record.step} {record.index} {record.bucket}: {record.command}")

    if args.csv:
        print(f"WROTE: {write_csv(log, args.csv)}")
    if args.json:
        print(f"WROTE: {write_json(log, args.json)}")

    unrecovered = log.unrecovered_buckets()
    if unrecovered:
        print(f"RECOVER: {len(unrecovered)} bucket(s) need manual follow-up")
        for bucket in unrecovered:
            print(f" - {bucket}")
        return EXIT_UNRECOVERED
    print(f"RECOVER: OK ({len(log)} step(s) recorded)")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="splunk-bucket-doctor",
        description="Scan Splunk index buckets and recover corrupted ones",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_indexes = sub.add_parser("indexes", help="List indexes known to splunkd")
    p_indexes.add_argument(
        "--include-all",
        action="store_true",
        help="Ignore the index selection file and deleted/disabled filters",
    )
    p_indexes.set_defaults(func=cmd_indexes)

    p_scan = sub.add_parser("scan", help="Report corrupt buckets of one index")
    p_scan.add_argument("--index", required=True, help="Index name")
    p_scan.set_defaults(func=cmd_scan)

    p_recover = sub.add_parser("recover", help="Attempt recovery of corrupt buckets")
    target = p_recover.add_mutually_exclusive_group(required=True)
    target.add_argument("--index", help="Index name")
    target.add_argument("--all", action="store_true", help="Every selected index")
    p_recover.add_argument(
        "--bucket",
        dest="buckets",
        action="append",
        default=[],
        help="Bucket path to recover (repeatable); skips the fsck scan",
    )
    p_recover.add_argument("--csv", help="Write the audit log to this CSV file")
    p_recover.add_argument("--json", help="Write the audit log to this JSON file")
    p_recover.set_defaults(func=cmd_recover)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "buckets", None) and not args.index:
        parser.error("--bucket requires --index")

    command = args.cmd.upper()
    try:
        configure_logging(args.log_level)
        ctx = get_app_context()
        return int(args.func(args, ctx))
    except (BucketDoctorError, FileNotFoundError, ValueError, RuntimeError) as exc:
        print(f"{command}: FAIL")
        print(f" - {exc}")
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
