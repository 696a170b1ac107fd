"""
Multicast Config — Public API
"""

from multicast.config.settings import DelegateConfig, DiagnosticsConfig

__all__ = [
    "DelegateConfig",
    "DiagnosticsConfig",
]
