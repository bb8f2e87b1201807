"""
Process-wide settings and helpers for HexWorld.

This module provides:
- Default map constants (radius, hex size)
- Logging setup: stdout plus an optional timestamped file in log_dump/,
  with day-old files moved to old_log_dump/
- Logger helpers for modules and for the generation pipeline
- Stage timing and memory reporting used by MapGenerator

It imports nothing from the maps package so it can be loaded first.
"""

import logging
import os
import shutil
import sys
import time
from datetime import datetime, timedelta
from pathlib import Path

import psutil

# ============================================================================
# CONFIGURATION CONSTANTS
# ============================================================================

MAP_RADIUS = 30  # Hex rings around the origin
HEX_SIZE = 1.0  # Axial -> world conversion size (noise sampling only)

LOGGER_NAME = 'HexWorld'
LOG_FORMAT = '[%(asctime)s] - [%(name)s] - [%(levelname)s] - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_MAX_AGE = timedelta(days=1)


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

def setup_logging(project_root=None, level=logging.DEBUG, write_files=True):
    """
    Configure the root logger for a generator run.

    With write_files, a new hexworld_YYYYMMDD_HHMMSS.log is opened in
    <project_root>/log_dump/ after files older than LOG_MAX_AGE have been
    moved to <project_root>/old_log_dump/. Console output always goes to
    stdout.

    Args:
        project_root (Path | str | None): Where the log directories live;
            looked up with get_project_root() when omitted
        level (int): Root logger level
        write_files (bool): Also log to a file

    Returns:
        logging.Logger: The application logger
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    log_path = None

    if write_files:
        root = Path(project_root) if project_root is not None else get_project_root()
        log_dir = root / "log_dump"
        archive_dir = root / "old_log_dump"
        log_dir.mkdir(exist_ok=True)
        archive_dir.mkdir(exist_ok=True)
        archived = _archive_old_logs(log_dir, archive_dir)

        log_path = log_dir / f"hexworld_{datetime.now():%Y%m%d_%H%M%S}.log"
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT,
                        handlers=handlers, force=True)

    logger = get_logger()
    if log_path is not None:
        logger.info(f"Logging to {log_path} ({archived} old log files archived)")
    else:
        logger.info("Logging to stdout only")
    return logger


def _archive_old_logs(log_dir, archive_dir):
    """
    Move *.log files older than LOG_MAX_AGE from log_dir to archive_dir.

    Returns:
        int: Number of files moved
    """
    cutoff = datetime.now() - LOG_MAX_AGE
    moved = 0
    for log_file in log_dir.glob("*.log"):
        if datetime.fromtimestamp(log_file.stat().st_mtime) < cutoff:
            shutil.move(str(log_file), str(archive_dir / log_file.name))
            moved += 1
    return moved


def get_logger(name=None):
    """
    Logger for a module; call as `logger = get_logger(__name__)`.

    Without a name the application logger ('HexWorld') is returned.
    """
    return logging.getLogger(name or LOGGER_NAME)


def get_map_logger():
    """Logger for the generation pipeline ('HexWorld.MapGeneration')."""
    return logging.getLogger(f'{LOGGER_NAME}.MapGeneration')


# ============================================================================
# PERFORMANCE MONITORING
# ============================================================================

class PerformanceTimer:
    """
    Context manager that logs how long a pipeline stage took.

    Usage:
        with PerformanceTimer(logger, "Roads", timings):
            ...

    Args:
        logger: Logger receiving the start (DEBUG) and completion (INFO) lines
        operation_name: Stage label used in the log lines
        timings: Optional dict; the elapsed seconds are stored under
            operation_name on exit

    Attributes:
        elapsed: Seconds spent inside the block (set on exit)
    """

    def __init__(self, logger, operation_name, timings=None):
        self.logger = logger
        self.operation_name = operation_name
        self.timings = timings
        self.start_time = None
        self.elapsed = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time
        if self.timings is not None:
            self.timings[self.operation_name] = self.elapsed
        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name} in {self.elapsed:.3f}s")
        else:
            self.logger.error(f"Failed: {self.operation_name} after {self.elapsed:.3f}s")
        return False


def log_memory_usage(logger, label="Memory usage"):
    """
    Log the resident set size of this process at DEBUG.

    Returns:
        float: RSS in megabytes
    """
    rss_mb = psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)
    logger.debug(f"{label}: {rss_mb:.1f} MB")
    return rss_mb


# ============================================================================
# PROJECT ROOT DISCOVERY
# ============================================================================

_CACHED_PROJECT_ROOT = None


def get_project_root(marker="pyproject.toml"):
    """
    Walk up from this file to the first directory containing `marker`.

    The result is cached. When no marker is found (an installed package),
    the current working directory is used so log files still have a home.

    Returns:
        Path: Project root directory
    """
    global _CACHED_PROJECT_ROOT

    if _CACHED_PROJECT_ROOT is None:
        here = Path(__file__).resolve().parent
        root = next((p for p in (here, *here.parents) if (p / marker).exists()), None)
        if root is None:
            root = Path.cwd()
            get_logger(__name__).warning(f"No '{marker}' above {here}; using {root} as project root")
        _CACHED_PROJECT_ROOT = root

    return _CACHED_PROJECT_ROOT
