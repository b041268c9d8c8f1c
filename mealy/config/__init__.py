"""Configuration module for mealy."""

from mealy.config.settings import MealyConfig, load_config

__all__ = ["MealyConfig", "load_config"]
