"""Core shared settings, logging and artifact utilities."""

from core.structured_logging import (
    PHASES,
    configure_structured_logging,
    get_phase,
    get_run_id,
    log_format_for_verbosity,
    phase_scope,
    set_run_id,
    verbosity_to_log_level,
)
from core.project_config import (
    ConfigValidationError,
    ProjectConfig,
    find_config_path,
    init_project,
    load_project_config,
    resolve_project_config,
    set_verbosity,
)
from core.run_artifacts import write_extraction_report

__all__ = [
    "PHASES",
    "configure_structured_logging",
    "log_format_for_verbosity",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "verbosity_to_log_level",
    "ConfigValidationError",
    "ProjectConfig",
    "find_config_path",
    "init_project",
    "load_project_config",
    "resolve_project_config",
    "set_verbosity",
    "write_extraction_report",
]
