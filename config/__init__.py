"""
Configuration module for watson-speech.

This module provides configuration models and loading utilities
for the Watson speech clients.
"""

from config.config import (
    WatsonConfig,
    EnvironmentSettings,
    AuthConfig,
    TransportConfig,
    RetryConfig,
    TextToSpeechConfig,
    SpeechToTextConfig,
)
from config.config_loader import (
    load_watson_config,
    load_environment_settings,
    load_yaml_config,
    config_manager,
    ConfigurationManager,
)

__all__ = [
    # Configuration models
    "WatsonConfig",
    "EnvironmentSettings",
    "AuthConfig",
    "TransportConfig",
    "RetryConfig",
    "TextToSpeechConfig",
    "SpeechToTextConfig",
    # Loader functions
    "load_watson_config",
    "load_environment_settings",
    "load_yaml_config",
    "config_manager",
    "ConfigurationManager",
]
