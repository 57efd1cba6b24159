"""
Configuration module for the Feedback Triage Engine.

This module contains all configuration dictionaries for classification and NPS.
"""

from .classifier_config import CLASSIFIER_CONFIG, NPS_CONFIG

__all__ = [
    "CLASSIFIER_CONFIG",
    "NPS_CONFIG",
]
