#!/usr/bin/env python3
"""
Check a list of sites for a browsable .git/ directory.

Usage:
    gitdir-probe domains.txt
    gitdir-probe domains.txt --screenshots --output screens --report

One domain per line, scheme included (https://example.com). Blank lines are
ignored.
"""

import argparse
import asyncio
import logging
import os

from playwright.async_api import Error as PlaywrightError

from .config import OUTPUT_FILE, REPORT_HTML, REPORT_XLSX, SCREENSHOT_DIR, ScanConfig
from .pool import iter_domains, run_scan
from .report import write_report
from .sinks import FileSink, PlaywrightRenderer, ScreenshotSink

USAGE = "Usage: gitdir-probe <domains.txt> [--screenshots] [--output PATH] [--report] [-v]"

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gitdir-probe",
        description="Find sites exposing a browsable .git/ directory.",
    )
    parser.add_argument("input", nargs="?", help="file with one domain per line")
    parser.add_argument(
        "--screenshots",
        action="store_true",
        help="capture a screenshot of each positive instead of writing a list",
    )
    parser.add_argument(
        "--output",
        help=f"result file (default {OUTPUT_FILE}) or, with --screenshots, directory (default {SCREENSHOT_DIR})",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help=f"with --screenshots, also write {REPORT_HTML} and {REPORT_XLSX} to the output directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def read_domains(path):
    # read everything up front so a bad file aborts before any request goes out
    with open(path, encoding="utf-8") as f:
        return list(iter_domains(f))


async def scan_to_file(domains, path, config):
    async with FileSink(path) as sink:
        summary = await run_scan(domains, sink, config)
    print(f"Check complete. {summary.positives} of {summary.dispatched} domains exposed, saved to {path}")
    return summary


async def scan_with_screenshots(domains, output_dir, config, report=False):
    async with PlaywrightRenderer(timeout=config.screenshot_timeout) as renderer:
        async with ScreenshotSink(output_dir, renderer) as sink:
            summary = await run_scan(domains, sink, config)

    print(f"Check complete. {len(sink.records)} screenshots saved in {output_dir}")
    if report:
        html_path = os.path.join(output_dir, REPORT_HTML)
        xlsx_path = os.path.join(output_dir, REPORT_XLSX)
        write_report(sink.records, html_path, xlsx_path)
        print(f"- HTML report: {html_path}")
        print(f"- Excel file:  {xlsx_path}")
    return sink.records


def main(argv=None, config=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    print("Starting .git directory check...")
    if not args.input:
        print(USAGE)
        return 0

    try:
        domains = read_domains(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error opening file: {e}")
        return 0

    config = config or ScanConfig()
    try:
        if args.screenshots:
            asyncio.run(scan_with_screenshots(domains, args.output or SCREENSHOT_DIR, config, args.report))
        else:
            asyncio.run(scan_to_file(domains, args.output or OUTPUT_FILE, config))
    except OSError as e:
        print(f"Error writing results: {e}")
        logger.debug("output setup failed", exc_info=True)
    except PlaywrightError as e:
        print(f"Error starting browser: {e}")
    # failures above are reported, not signalled through the exit code
    return 0
