"""
Logging utilities for the signature extractor.

Console output goes through rich; library modules only ever call
``logging.getLogger(__name__)`` and leave handler setup to the CLI.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Union, Generator

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

console = Console()


class ExtractorFormatter(logging.Formatter):
    """Plain-text formatter used when rich output is disabled and for log files."""

    def __init__(self, include_module: bool = True, include_function: bool = False):
        format_parts = ["%(asctime)s"]
        if include_module:
            format_parts.append("%(name)s")
        format_parts.append("%(levelname)s")
        if include_function:
            format_parts.append("%(funcName)s")
        format_parts.append("%(message)s")
        super().__init__(" - ".join(format_parts), datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    use_rich: bool = True,
    format_style: str = "detailed"
) -> logging.Logger:
    """
    Set up logging for the signature extractor.

    Args:
        level: Logging level
        log_file: Optional log file path
        use_rich: Whether to use rich console output
        format_style: Format style ('simple', 'detailed', 'minimal')

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    if isinstance(level, str):
        level = getattr(logging, level.upper())
    root_logger.setLevel(level)

    if use_rich:
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=format_style == "detailed",
            markup=False,
            rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_style == "minimal":
            formatter = ExtractorFormatter(include_module=False)
        elif format_style == "simple":
            formatter = ExtractorFormatter(include_module=True)
        else:
            formatter = ExtractorFormatter(include_module=True, include_function=True)
        console_handler.setFormatter(formatter)

    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(ExtractorFormatter(include_module=True, include_function=True))
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


@contextmanager
def log_processing_stats(
    operation: str,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO
) -> Generator[Dict[str, Any], None, None]:
    """
    Context manager for logging processing statistics.

    The caller increments ``files_processed``, ``files_failed`` and
    ``regions_extracted`` on the yielded dictionary.
    """
    if logger is None:
        logger = logging.getLogger()

    stats = {
        "operation": operation,
        "start_time": time.time(),
        "files_processed": 0,
        "files_failed": 0,
        "regions_extracted": 0,
    }

    logger.log(level, "Starting %s", operation)

    try:
        yield stats
    except Exception as e:
        duration = time.time() - stats["start_time"]
        logger.error("Failed %s after %.2fs: %s", operation, duration, e)
        raise

    duration = time.time() - stats["start_time"]
    stats["duration"] = duration
    logger.log(
        level,
        "Completed %s: processed=%d, failed=%d, regions=%d, duration=%.2fs",
        operation,
        stats["files_processed"],
        stats["files_failed"],
        stats["regions_extracted"],
        duration,
    )


class ProcessingProgress:
    """Progress tracking for batch operations."""

    def __init__(self, description: str, total: int, logger: Optional[logging.Logger] = None,
                 enabled: bool = True):
        self.description = description
        self.total = total
        self.logger = logger or logging.getLogger()
        self.completed = 0
        self.failed = 0

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            disable=not enabled,
        )
        self.task_id = None

    def __enter__(self) -> 'ProcessingProgress':
        self.progress.__enter__()
        self.task_id = self.progress.add_task(self.description, total=self.total)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.__exit__(exc_type, exc_val, exc_tb)
        self.logger.info(
            "Completed %s: %d/%d successful (%d failed)",
            self.description, self.completed, self.total, self.failed,
        )

    def update(self, advance: int = 1, success: bool = True, item: Optional[str] = None) -> None:
        """Advance the bar; ``item`` names the page that was just handled."""
        if self.task_id is not None:
            description = f"{self.description} ({item})" if item else self.description
            self.progress.update(self.task_id, advance=advance, description=description)

        if success:
            self.completed += advance
        else:
            self.failed += advance
