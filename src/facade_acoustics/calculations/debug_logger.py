"""
Debug logging framework for facade calculations
Centralizes and standardizes debug output across the calculation system
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional


SPECTRUM_KEYS = {'spectrum', 'lw', 'lp_inside', 'lw_out', 'transmission_loss', 'absorption'}


class ISODebugLogger:
    """Centralized debug logger for the ISO 12354-4 calculation system"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._setup_logger()
            ISODebugLogger._initialized = True

    def _setup_logger(self):
        """Initialize the logging configuration from the environment"""
        env_val = str(os.environ.get("ISO_DEBUG_EXPORT", "")).strip().lower()
        self.debug_enabled = env_val in {"1", "true", "yes", "on"}

        debug_level = os.environ.get("ISO_DEBUG_LEVEL", "INFO").upper()

        self.logger = logging.getLogger('facade_acoustics')
        self.logger.setLevel(getattr(logging, debug_level, logging.INFO))
        self.logger.handlers.clear()

        if self.debug_enabled:
            formatter = logging.Formatter(
                '%(asctime)s [ISO-%(levelname)s] %(component)s: %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            log_file = os.environ.get("ISO_DEBUG_FILE")
            if log_file:
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

    def reconfigure(self):
        """Re-read the environment (tests toggle ISO_DEBUG_EXPORT)"""
        self._setup_logger()

    def _emit(self, level: int, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        if not self.debug_enabled:
            return
        if data:
            message = f"{message} {self._format_debug_data(data)}"
        self.logger.log(level, message, extra={'component': component})

    def debug(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log debug message with component context"""
        self._emit(logging.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log info message with component context"""
        self._emit(logging.INFO, component, message, data)

    def warning(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        self._emit(logging.WARNING, component, message, data)

    def error(self, component: str, message: str, error: Optional[Exception] = None, data: Optional[Dict[str, Any]] = None):
        """Log error message with component context"""
        if error:
            message += f" Error: {error}"
        self._emit(logging.ERROR, component, message, data)

    def _format_debug_data(self, data: Dict[str, Any]) -> str:
        """Format debug data for logging"""
        formatted = {}
        for key, value in data.items():
            if key in SPECTRUM_KEYS and isinstance(value, dict):
                # Band keys become strings in JSON anyway; round levels to 0.1 dB
                formatted[key] = {str(band): round(float(level), 1) for band, level in value.items()}
            elif key.endswith('_db') and isinstance(value, (int, float)):
                formatted[key] = f"{float(value):.1f}dB"
            elif key.endswith('_dba') and isinstance(value, (int, float)):
                formatted[key] = f"{float(value):.1f}dBA"
            else:
                formatted[key] = value
        try:
            return json.dumps(formatted, separators=(',', ':'), default=str)
        except (TypeError, ValueError):
            return str(data)

    def log_calculation_start(self, component: str, calculation_type: str, item_count: Optional[int] = None):
        """Log the start of a calculation"""
        data = {'calculation_type': calculation_type}
        if item_count is not None:
            data['item_count'] = item_count
        self.info(component, "Starting calculation", data)

    def log_calculation_end(self, component: str, calculation_type: str, success: bool, result_summary: Optional[Dict] = None):
        """Log the end of a calculation"""
        data = {'calculation_type': calculation_type, 'status': "completed" if success else "failed"}
        if result_summary:
            data.update(result_summary)
        self.info(component, "Calculation finished", data)

    def log_element_processing(self, component: str, element_type: str, element_id: Optional[str],
                               lw_out: Optional[Dict[int, float]] = None):
        """Log element processing details"""
        data = {'element_type': element_type, 'element_id': element_id}
        if lw_out:
            data['lw_out'] = lw_out
        self.debug(component, "Processing element", data)

    def log_validation_result(self, component: str, is_valid: bool, errors: List[str], warnings: List[str]):
        """Log validation results"""
        data = {
            'is_valid': is_valid,
            'error_count': len(errors),
            'warning_count': len(warnings)
        }
        if errors:
            data['errors'] = errors
        if warnings:
            data['warnings'] = warnings

        if is_valid:
            self.info(component, "Validation passed", data)
        else:
            self.warning(component, "Validation failed", data)


# Global logger instance
debug_logger = ISODebugLogger()
