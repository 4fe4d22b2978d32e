#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import signal
import sys
from pathlib import Path

from ocr_batch.batch.events import LoggingObserver
from ocr_batch.errors import OCRBatchError
from ocr_batch.pipeline import BatchOCRPipeline
from ocr_batch.utils.logging import configure_logging, get_logger

logger = get_logger("cli")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recognize text in a batch of images and collect it into one PDF."
    )
    parser.add_argument("inputs", nargs="+", help="Image files or directories of images.")
    parser.add_argument(
        "--lang",
        default=None,
        help="Tesseract language code, e.g. eng, vie or eng+vie (defaults to config).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional path to config.yaml",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to store the PDF and other outputs.",
    )
    parser.add_argument("--pdf-name", default=None, help="File name for the batch PDF.")
    parser.add_argument(
        "--text",
        action="store_true",
        help="Also write the recognized text as a plain .txt file.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Write a JSON summary of item statuses and results.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    config = None
    if args.config:
        from ocr_batch.config import load_config

        config = load_config(args.config)

    pipeline = BatchOCRPipeline(config=config, observer=LoggingObserver())
    output_dir = args.output_dir or pipeline.config.output_dir
    pipeline.submit_paths(Path(p) for p in args.inputs)
    for item in pipeline.queue:
        logger.info("%s: %s", item.display_name, item.label)

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, pipeline.cancel)
    except NotImplementedError:  # pragma: no cover - Windows event loops
        pass

    await pipeline.start(args.lang)

    for item in pipeline.queue:
        logger.info("%s: %s", item.display_name, item.label)

    if args.summary:
        output_dir.mkdir(parents=True, exist_ok=True)
        summary_path = output_dir / "ocr_batch_summary.json"
        summary_path.write_text(
            json.dumps(pipeline.runner.summary().ordered(), indent=2), encoding="utf-8"
        )
        print(f"Summary -> {summary_path}")

    if not pipeline.can_compose:
        print("No results to write.")
        return 1

    pdf_path = pipeline.save_pdf(output_dir, args.pdf_name)
    print(f"Processed {len(pipeline.runner.results)} image(s) -> {pdf_path}")
    if args.text:
        print(f"Text -> {pipeline.save_text(output_dir)}")
    return 0


def main() -> None:
    args = parse_args()
    configure_logging()
    if args.verbose:
        configure_logging(level=10)
    try:
        code = asyncio.run(run(args))
    except (OCRBatchError, FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
