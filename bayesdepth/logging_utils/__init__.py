from .log_config import ensure_default_logging, setup_logging

__all__ = ['ensure_default_logging', 'setup_logging']
