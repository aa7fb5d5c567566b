"""Wizard steps."""

from enum import Enum


class WizardStep(str, Enum):
    """Linear steps of the transfer wizard."""

    INPUT = "input"
    SUMMARY = "summary"
    SUCCESS = "success"
