"""
Utility modules for the gateway client
"""
from .config_loader import DEFAULT_BASE_URL, GatewayConfig, load_gateway_config

__all__ = [
    'DEFAULT_BASE_URL',
    'GatewayConfig',
    'load_gateway_config',
]
