"""Logging configuration and utilities."""

import logging
import logging.config
import re
import yaml
import os
from pathlib import Path
from typing import Optional


_DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_SECRET_PATTERNS = [
    (re.compile(r'(Bearer\s+)[^\s\'",]+', re.IGNORECASE), r'\1***'),
    (re.compile(r'((?:client_secret|access_token)[\'"]?\s*[:=]\s*[\'"]?)[^\s\'",}&]+', re.IGNORECASE), r'\1***'),
]


class RedactSecretsFilter(logging.Filter):
    """Mask bearer tokens and OAuth secrets before a record is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern, replacement in _SECRET_PATTERNS:
            redacted = pattern.sub(replacement, redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _basic_config(level: str, logs_dir: str) -> None:
    handlers = [
        logging.StreamHandler(),
        logging.FileHandler(f'{logs_dir}/app.log')
    ]
    for handler in handlers:
        handler.addFilter(RedactSecretsFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=_DEFAULT_FORMAT,
        handlers=handlers,
        force=True
    )


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    logs_dir: str = "logs"
) -> None:
    """
    Setup logging configuration.
    
    Args:
        config_path: Path to logging configuration file
        log_level: Override log level
        logs_dir: Directory for log files
    """
    Path(logs_dir).mkdir(exist_ok=True)
    
    if config_path is None:
        config_path = "config/logging.yaml"
    
    level = log_level.upper() if log_level else 'INFO'
    
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f)
            
            # Override log level if provided
            if log_level:
                config['root']['level'] = level
                for logger_name in config.get('loggers', {}):
                    config['loggers'][logger_name]['level'] = level
            
            logging.config.dictConfig(config)
        except Exception as e:
            _basic_config(level, logs_dir)
            logging.warning(f"Failed to load logging config from {config_path}: {e}")
    else:
        _basic_config(level, logs_dir)
        logging.warning(f"Logging config file not found at {config_path}, using basic configuration")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)
