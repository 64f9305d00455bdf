#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Project configuration module
Manage the global configuration of the application
Sensitive information (the NewsAPI key) is only ever loaded from environment variables
or the .env file, ordinary settings fall back to built-in defaults.
"""

import os
import logging
from typing import Dict, Any, Optional
from dotenv import load_dotenv

# Load .env file (ensure there is a .env file in the project root directory)
load_dotenv()

logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_BASE_URL = "https://newsapi.org"
DEFAULT_COUNTRY = "us"
DEFAULT_FETCH_TIMEOUT = 7.0
DEFAULT_IMAGE_TIMEOUT = 5.0

# --- Configuration Keys ---
# Environment variables take precedence
API_KEY_NEWSAPI = "NEWS_API_KEY"

CONFIG_KEY_BASE_URL = "NEWS_API_BASE_URL"
CONFIG_KEY_COUNTRY = "NEWS_API_COUNTRY"
CONFIG_KEY_FETCH_TIMEOUT = "NEWS_FETCH_TIMEOUT"
CONFIG_KEY_IMAGE_TIMEOUT = "NEWS_IMAGE_TIMEOUT"


class AppConfig:
    """Application configuration class"""

    DEFAULT_CONFIG = {
        CONFIG_KEY_BASE_URL: DEFAULT_BASE_URL,
        CONFIG_KEY_COUNTRY: DEFAULT_COUNTRY,
        CONFIG_KEY_FETCH_TIMEOUT: DEFAULT_FETCH_TIMEOUT,
        CONFIG_KEY_IMAGE_TIMEOUT: DEFAULT_IMAGE_TIMEOUT,
    }

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        Initialize configuration

        Args:
            environ: Mapping to read from instead of os.environ (used by tests)
        """
        self._environ = os.environ if environ is None else environ
        self._config: Dict[str, Any] = self.DEFAULT_CONFIG.copy()
        # Store sensitive configuration loaded from environment variables
        self._secrets: Dict[str, Optional[str]] = {}

        # 1. Load environment variables (Secrets)
        self._load_secrets_from_env()

        # 2. Load ordinary settings, overriding the defaults
        self._load_settings_from_env()

        logger.info(
            f"Configuration initialized. Endpoint: {self.base_url}, country: {self.country}"
        )
        logger.info(f"Loaded secrets keys: {list(self._secrets.keys())}")

    def _load_secrets_from_env(self):
        """Load sensitive configuration from environment variables"""
        self._secrets[API_KEY_NEWSAPI] = self._environ.get(API_KEY_NEWSAPI) or None
        if not self._secrets[API_KEY_NEWSAPI]:
            logger.warning(
                "NEWS_API_KEY not found in environment variables or .env file."
            )

    def _load_settings_from_env(self) -> None:
        """Load non-secret settings, keeping defaults for missing or invalid values"""
        for key in (CONFIG_KEY_BASE_URL, CONFIG_KEY_COUNTRY):
            value = (self._environ.get(key) or "").strip()
            if value:
                self._config[key] = value

        for key in (CONFIG_KEY_FETCH_TIMEOUT, CONFIG_KEY_IMAGE_TIMEOUT):
            raw = self._environ.get(key)
            if raw is None or not raw.strip():
                continue
            try:
                value = float(raw)
            except ValueError:
                logger.warning(
                    f"Ignoring invalid value '{raw}' for {key}, using default {self._config[key]}"
                )
                continue
            if value <= 0:
                logger.warning(
                    f"Ignoring non-positive value '{raw}' for {key}, using default {self._config[key]}"
                )
                continue
            self._config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value (prioritize getting from secrets, then settings)
        """
        if key in self._secrets:
            return self._secrets[key]
        return self._config.get(key, default)

    @property
    def api_key(self) -> Optional[str]:
        return self._secrets.get(API_KEY_NEWSAPI)

    @property
    def base_url(self) -> str:
        return self._config[CONFIG_KEY_BASE_URL]

    @property
    def country(self) -> str:
        return self._config[CONFIG_KEY_COUNTRY]

    @property
    def fetch_timeout(self) -> float:
        """Timeout in seconds applied to the headlines request"""
        return self._config[CONFIG_KEY_FETCH_TIMEOUT]

    @property
    def image_timeout(self) -> float:
        """Timeout in seconds applied to each thumbnail request"""
        return self._config[CONFIG_KEY_IMAGE_TIMEOUT]


# --- Global configuration instance ---
# Initialized in main.py
_global_config: Optional[AppConfig] = None


def init_config() -> AppConfig:
    """Initialize global configuration instance"""
    global _global_config
    if _global_config is None:
        _global_config = AppConfig()
    return _global_config


def get_config() -> AppConfig:
    """Get global configuration instance (must call init_config first)"""
    if _global_config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _global_config
