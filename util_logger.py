"""
Unified Logger System.

JSON-only structured logging for deployment runs. Every line written to
stdout is a single JSON object so a CI log collector (or Azure Monitor)
can parse it without regexes.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Logging context dataclass
    ComponentConfig: Per-component logger settings
    JSONFormatter: Structured formatter
    LoggerFactory: Factory for creating loggers
    log_exceptions: Exception logging decorator

Dependencies:
    Standard library only (logging, enum, dataclasses, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass
import logging
import sys
import os
import json
import traceback
from functools import wraps


# ============================================================================
# COMPONENT TYPES - Architectural layers
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the deployment tool's layers.

    Each layer has specific logging needs and levels.
    """
    CLI = "cli"                # Entry point layer
    SERVICE = "service"        # Orchestration / business logic layer
    CORE = "core"              # Poller and retry coordinator
    REPOSITORY = "repository"  # Azure SDK access layer
    FACTORY = "factory"        # Object creation layer
    VALIDATOR = "validator"    # Environment validation


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# LOG CONTEXT - Correlation and tracking
# ============================================================================

@dataclass
class LogContext:
    """
    Context for log correlation across one deployment run.

    deployment_id ties together every line emitted by a single
    invocation; operation names the command that started it.
    """
    deployment_id: Optional[str] = None
    resource_group: Optional[str] = None
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            k: v for k, v in {
                'deployment_id': self.deployment_id,
                'resource_group': self.resource_group,
                'operation': self.operation,
            }.items() if v is not None
        }


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Configuration for component-specific logging.

    Each component type can have different settings.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO


# ============================================================================
# JSON FORMATTER - Structured logging
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    Outputs one JSON object per record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        if hasattr(record, 'extra_fields'):
            log_obj.update(record.extra_fields)

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.SERVICE,
            "DeploymentOrchestrator"
        )
        logger.info("Starting deployment")
    """

    _default_level = LogLevel.DEBUG if os.getenv('DEBUG_LOGGING', '').lower() == 'true' else LogLevel.INFO

    DEFAULT_CONFIGS = {
        ComponentType.CLI: ComponentConfig(
            component_type=ComponentType.CLI,
            log_level=_default_level
        ),
        ComponentType.SERVICE: ComponentConfig(
            component_type=ComponentType.SERVICE,
            log_level=_default_level
        ),
        ComponentType.CORE: ComponentConfig(
            component_type=ComponentType.CORE,
            log_level=_default_level
        ),
        ComponentType.REPOSITORY: ComponentConfig(
            component_type=ComponentType.REPOSITORY,
            log_level=_default_level
        ),
        ComponentType.FACTORY: ComponentConfig(
            component_type=ComponentType.FACTORY,
            log_level=_default_level
        ),
        ComponentType.VALIDATOR: ComponentConfig(
            component_type=ComponentType.VALIDATOR,
            log_level=_default_level
        ),
    }

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "ReadinessPoller")
            context: Optional log context for correlation
            config: Optional custom configuration

        Returns:
            Configured Python logger
        """
        if config is None:
            config = cls.DEFAULT_CONFIGS.get(
                component_type,
                ComponentConfig(component_type=component_type)
            )

        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        if isinstance(config.log_level, str):
            log_level = LogLevel.from_string(config.log_level).to_python_level()
        else:
            log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # Only one JSON handler per named logger, however often it is requested
        has_json_handler = any(
            isinstance(h.formatter, JSONFormatter) for h in logger.handlers
        )
        if not has_json_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        # Root handlers (pytest caplog) still see the records
        logger.propagate = True

        if not hasattr(logger, '_context_wrapped'):
            original_log = logger._log

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Wrapper to inject context as custom dimensions."""
                if extra is None:
                    extra = {}

                if context:
                    custom_dims = context.to_dict()
                    custom_dims['component_type'] = component_type.value
                    custom_dims['component_name'] = name
                else:
                    custom_dims = {
                        'component_type': component_type.value,
                        'component_name': name
                    }

                if 'custom_dimensions' in extra:
                    custom_dims.update(extra['custom_dimensions'])

                extra['custom_dimensions'] = custom_dims

                # +1 to account for this wrapper function
                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            logger._context_wrapped = True

        return logger

    @classmethod
    def create_with_context(
        cls,
        component_type: ComponentType,
        name: str,
        deployment_id: Optional[str] = None,
        resource_group: Optional[str] = None,
        operation: Optional[str] = None
    ) -> logging.Logger:
        """
        Create logger with deployment context.

        Convenience method for creating loggers with common context fields.
        """
        context = LogContext(
            deployment_id=deployment_id,
            resource_group=resource_group,
            operation=operation
        ) if any([deployment_id, resource_group, operation]) else None

        return cls.create_logger(
            component_type=component_type,
            name=name,
            context=context
        )


# ============================================================================
# EXCEPTION DECORATOR - Automatic exception logging with context
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator to automatically log exceptions with full context.

    Can be used in three ways:
    1. With existing logger: @log_exceptions(logger=my_logger)
    2. With component info: @log_exceptions(ComponentType.SERVICE, "MovieImporter")
    3. Simple: @log_exceptions() - uses function module and name

    The exception is always re-raised.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if logger:
                log = logger
            elif component_type and component_name:
                log = LoggerFactory.create_logger(component_type, component_name)
            else:
                log = LoggerFactory.create_logger(
                    ComponentType.SERVICE,
                    func.__module__ or "unknown"
                )

            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Exception in {func.__name__}",
                    exc_info=True,
                    extra={
                        'custom_dimensions': {
                            'function_name': func.__name__,
                            'function_module': func.__module__,
                            'exception_type': type(e).__name__,
                            'exception_message': str(e),
                            'traceback': traceback.format_exc()
                        }
                    }
                )
                raise
        return wrapper
    return decorator
