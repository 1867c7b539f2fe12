# --- pdftext_lib/progress.py ---
"""
pdftext_lib/progress.py: Progress reporting for an extraction.

The sink is a plain callable `(percent, status)` invoked synchronously at
fixed points of the pipeline. Only one extraction is in flight at a time, so
no locking is involved.
"""
import logging

log_progress = logging.getLogger("pdftext.progress")

VALIDATE = 10
LOAD = 20
PARSE = 30
PAGE_LOOP = 40
PAGE_SPAN = 50
FINALIZE = 95
COMPLETE = 100


class ProgressReporter:
    """Emits non-decreasing progress values in [0, 100] to an optional sink."""

    def __init__(self, sink=None):
        self.sink = sink
        self.last = 0.0

    def report(self, percent, status):
        percent = min(max(float(percent), self.last), 100.0)
        self.last = percent
        log_progress.debug("%5.1f%% %s", percent, status)
        if self.sink:
            self.sink(percent, status)

    def validating(self):
        self.report(VALIDATE, "Validating PDF file...")

    def loading(self):
        self.report(LOAD, "Loading PDF document...")

    def parsing(self):
        self.report(PARSE, "Parsing PDF structure...")

    def start_pages(self, page_count):
        self.report(PAGE_LOOP, f"Processing {page_count} pages...")

    def page_done(self, page_number, page_count):
        """Progress after page k of n is 40 + k/n * 50."""
        self.report(
            PAGE_LOOP + (page_number / page_count) * PAGE_SPAN,
            f"Processed page {page_number} of {page_count}",
        )

    def finalizing(self):
        self.report(FINALIZE, "Finalizing text extraction...")

    def completed(self):
        self.report(COMPLETE, "Text extraction completed")


class BatchProgress:
    """
    Maps the progress of file `index` (0-based) of a `total`-file batch onto
    the overall batch range, prefixing statuses with the file name.
    """

    def __init__(self, sink, index, total, name):
        self.sink, self.index, self.total, self.name = sink, index, total, name

    def __call__(self, percent, status):
        if not self.sink:
            return
        overall = (self.index / self.total) * 100 + percent / self.total
        self.sink(overall, f"{self.name}: {status}")
