from .depth_config import DepthPriorConfig, DEFAULT_CONFIG

__all__ = ['DepthPriorConfig', 'DEFAULT_CONFIG']
