#!/usr/bin/env python3
"""
pdftext: Extracts readable text from PDF files.

This script validates a batch of PDF files, reconstructs each page's text from
the positioned fragments in its content stream (handled by pdftext_lib), and
writes the result to stdout or to one output file per input, showing a live
progress bar while it works.
"""

import argparse
import json
import logging
import os
import sys
import time

# --- Dependency Imports ---
try:
    from rich.console import Console
    from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
except ImportError as e:
    print(f"Error: Missing required library. -> {e}")
    print("Please install all core dependencies with:")
    print("pip install pdfminer.six rich")
    sys.exit(1)

# --- Local Application Imports ---
from pdftext_lib.api import extract_detailed_with_progress
from pdftext_lib.config import ConfigService
from pdftext_lib.errors import PdfTextError, ValidationError
from pdftext_lib.export import EXPORT_FORMATS, export_text
from pdftext_lib.models import ExtractionOptions, PdfFile
from pdftext_lib.normalizer import text_statistics
from pdftext_lib.progress import BatchProgress
from pdftext_lib.source import PdfFragmentSource
from pdftext_lib.validation import ensure_valid, select_pdf_files, validate_batch
from core.log_utils import ContextFilter, setup_logging

app_log = logging.getLogger("pdftext")


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


class Application:
    """Orchestrates the extraction workflow based on command-line arguments."""

    DEFAULT_CONFIG = "pdftext.cfg"

    def __init__(self, args):
        self.args = args
        self.config = ConfigService(args.config)
        self.console = Console(stderr=True)
        self.stats = {"files": []}

    def run(self):
        """Main entry point for the application logic."""
        self.stats["start_time"] = time.monotonic()
        log_settings = self.config.logging_settings()
        setup_logging(
            project_name="pdftext",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs or log_settings["color_logs"],
            debug_topics=self.args.debug_topics or log_settings["debug_topics"],
            log_file=self.args.log_file,
        )

        if self.args.write_config:
            self.config.save_settings(self.config.get_settings())
            return

        files = self._load_files()
        options = self._build_options()
        source = PdfFragmentSource(**self._source_kwargs())

        files = self._validate(files)
        handlers = logging.getLogger().handlers
        for index, pdf_file in enumerate(files):
            context = ContextFilter(pdf_file.name)
            for h in handlers:
                h.addFilter(context)
            try:
                self._process_file(pdf_file, index, len(files), options, source)
            finally:
                for h in handlers:
                    h.removeFilter(context)

        self._display_epilogue()

    def _load_files(self):
        """Reads every input path into a PdfFile."""
        return [PdfFile.from_path(path) for path in self.args.pdf_files]

    def _build_options(self):
        """Merges config-file options with command-line overrides."""
        base = self.config.extraction_options()
        return ExtractionOptions(
            preserve_formatting=base.preserve_formatting and self.args.preserve_formatting,
            include_metadata=base.include_metadata and self.args.include_metadata,
            combine_text_items=base.combine_text_items and self.args.combine_text_items,
        )

    def _source_kwargs(self):
        kwargs = self.config.source_kwargs()
        if self.args.password is not None:
            kwargs["password"] = self.args.password
        return kwargs

    def _validate(self, files):
        """Drops non-PDF inputs, then checks the batch limit and every file."""
        files = select_pdf_files(files)
        check = validate_batch(files)
        if not check.ok:
            raise ValidationError(check.reason)
        for pdf_file in files:
            ensure_valid(pdf_file)
        return files

    def _process_file(self, pdf_file, index, total, options, source):
        """Extracts one file with a live progress bar and writes its output."""
        start = time.monotonic()
        with Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>5.1f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
            disable=self.args.no_progress,
        ) as progress:
            task = progress.add_task(pdf_file.name, total=100)

            def on_progress(percent, status):
                progress.update(task, completed=percent, description=status)

            sink = BatchProgress(on_progress, index, total, pdf_file.name)
            result = extract_detailed_with_progress(pdf_file, sink, options, source)

        if self.args.format == "json":
            content = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
        else:
            title = os.path.splitext(pdf_file.name)[0]
            content = export_text(result.text, title, self.args.format)

        elapsed = time.monotonic() - start
        self.stats["files"].append(
            {
                "name": pdf_file.name,
                "pages": result.page_count,
                "duration": elapsed,
                **text_statistics(result.text),
            }
        )
        self._write_output(pdf_file, content)

    def _write_output(self, pdf_file, content):
        """Writes to the output directory, or to stdout when none was given."""
        base = os.path.splitext(pdf_file.name)[0]
        if self.args.format in EXPORT_FORMATS:
            extension = EXPORT_FORMATS[self.args.format]["extension"]
        else:
            extension = "json"

        if not self.args.output_dir:
            sys.stdout.write(content + "\n")
            return
        os.makedirs(self.args.output_dir, exist_ok=True)
        out_path = os.path.join(self.args.output_dir, f"{base}.{extension}")
        try:
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(content)
            app_log.info("Output saved to: '%s'", out_path)
        except IOError as e:
            app_log.error("Error saving output for %s: %s", pdf_file.name, e)

    def _display_epilogue(self):
        """Logs a statistics summary for every processed file."""
        total_dur = time.monotonic() - self.stats.get("start_time", time.monotonic())
        report = [f"\n--- Extraction Summary ({len(self.stats['files'])} files) ---"]
        for entry in self.stats["files"]:
            report.append(
                f"{entry['name']}: {entry['pages']:,} pages, {entry['characters']:,} chars, "
                f"{entry['words']:,} words, {entry['lines']:,} lines, "
                f"{entry['paragraphs']:,} paragraphs ({entry['duration']:.2f}s)"
            )
        report.append(f"Total Execution Time: {total_dur:.1f} seconds")
        app_log.info("\n".join(report))

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python pdftext.py document.pdf",
            "  python pdftext.py a.pdf b.pdf -o out -f html",
            "  python pdftext.py document.pdf -f json --no-combine",
            "  python pdftext.py document.pdf -d reconstruct,assemble --color-logs",
        ]
        parser = argparse.ArgumentParser(
            description="Extracts readable text from PDF documents.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples),
        )

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument("pdf_files", nargs="*", help="Paths to the input PDF files.")
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )
        g_opts.add_argument(
            "-c",
            "--config",
            default=Application.DEFAULT_CONFIG,
            metavar="FILE",
            help="Configuration file. (default: %(default)s)",
        )

        g_proc = parser.add_argument_group("Extraction Control")
        g_proc.add_argument(
            "--no-preserve-formatting",
            action="store_false",
            dest="preserve_formatting",
            help="Do not infer line breaks and gaps from positions. (default: Enabled)",
        )
        g_proc.add_argument(
            "--no-metadata",
            action="store_false",
            dest="include_metadata",
            help="Skip the document info dictionary. (default: Enabled)",
        )
        g_proc.add_argument(
            "--no-combine",
            action="store_false",
            dest="combine_text_items",
            help="Do not insert spaces between fragments on one line. (default: Enabled)",
        )
        g_proc.add_argument(
            "--password",
            default=None,
            help="Password for encrypted documents.",
        )

        g_out = parser.add_argument_group("Script Output & Actions")
        g_out.add_argument(
            "-o",
            "--output-dir",
            metavar="DIR",
            default=None,
            help="Write one output file per input into DIR instead of stdout.",
        )
        g_out.add_argument(
            "-f",
            "--format",
            default="txt",
            choices=sorted(EXPORT_FORMATS) + ["json"],
            help="Output format. (default: %(default)s)",
        )
        g_out.add_argument(
            "--write-config",
            action="store_true",
            help="Write the current settings to the config file and exit.",
        )
        g_out.add_argument(
            "--no-progress",
            action="store_true",
            help="Hide the progress bar. (default: %(default)s)",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Redirect all logging output to a specified file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output. (default: %(default)s)",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress. (default: %(default)s)",
        )
        g_out.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,source,reconstruct,assemble,progress,...).",
        )

        return parser.parse_args(args)


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        app = Application(args)
        app.run()
    except FileNotFoundError as e:
        app_log.critical(str(e))
        sys.exit(1)
    except PdfTextError as e:
        app_log.critical("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        app_log.info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        app_log.critical("\nAn unexpected error occurred: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
