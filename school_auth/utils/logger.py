"""
Logging utilities for the auth functions

Configures the stdlib logging tree from a dictConfig (optionally loaded from
YAML) and routes structlog through it.
"""

import copy
import logging
import logging.config
import os
from typing import Any, Dict, Optional

import structlog
import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'loggers': {
        'school_auth': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    }
}


def load_logging_config(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Load a dictConfig from a YAML file, falling back to the default

    Args:
        config_path: Path to a .yml/.yaml logging configuration

    Returns:
        dict: A fresh copy of the configuration to apply
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f)
            if isinstance(config, dict):
                return config
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger(__name__).warning(
                "Failed to load logging config from %s: %s", config_path, e
            )
    return copy.deepcopy(DEFAULT_LOGGING_CONFIG)


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """
    Setup logging configuration

    Args:
        config_path: Path to logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'json')
        environment: Section of the config with environment-specific overrides
    """
    config = load_logging_config(config_path)

    # Apply environment-specific overrides
    env_config = config.pop(environment, None) if environment else None
    if isinstance(env_config, dict):
        config.setdefault('handlers', {}).update(env_config.get('handlers', {}))
        config.setdefault('loggers', {}).update(env_config.get('loggers', {}))

    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level

    if log_format and log_format in config.get('formatters', {}):
        for handler_config in config.get('handlers', {}).values():
            handler_config['formatter'] = log_format

    logging.config.dictConfig(config)

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if log_format == 'json'
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """Logger for privileged actions"""

    def __init__(self, name: str = "school_auth.audit"):
        self.logger = structlog.get_logger(name)

    def log_user_action(
        self,
        user_id: str,
        action: str,
        resource: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log user action for audit trail"""
        self.logger.info(
            "User action",
            user_id=user_id,
            action=action,
            resource=resource,
            details=details or {},
            event_type='user_action',
        )


def get_audit_logger() -> AuditLogger:
    """Get audit logger instance"""
    return AuditLogger()


def init_logging(settings) -> None:
    """Initialize logging from application settings"""
    setup_logging(
        config_path=settings.logging_config_path,
        log_level=settings.log_level,
        log_format=settings.log_format,
        environment=settings.environment,
    )
