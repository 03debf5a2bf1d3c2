# ARW Cleanup Tool
# A Python tool to quarantine or delete ARW files that have no matching JPG

from .models import (
    CleanupConfig, CleanupStats, DirectoryGroup, HandlingMode,
    OperationResult, OperationStatus, SummaryContext, QUARANTINE_DIR_NAME
)
from .exceptions import ProcessingError, ValidationError, FileOperationError
from .file_system import FileSystem, LocalFileSystem
from .file_scanner import FileScanner
from .quarantine import resolve_quarantine_target, is_within
from .events import CleanupEvent
from .reporter import CleanupReporter, ConsoleCleanupReporter
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .path_validator import PathValidator
from .cleanup_runner import CleanupRunner

__all__ = [
    'CleanupConfig',
    'CleanupStats',
    'DirectoryGroup',
    'HandlingMode',
    'OperationResult',
    'OperationStatus',
    'SummaryContext',
    'QUARANTINE_DIR_NAME',
    'ProcessingError',
    'ValidationError',
    'FileOperationError',
    'FileSystem',
    'LocalFileSystem',
    'FileScanner',
    'resolve_quarantine_target',
    'is_within',
    'CleanupEvent',
    'CleanupReporter',
    'ConsoleCleanupReporter',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'PathValidator',
    'CleanupRunner'
]
