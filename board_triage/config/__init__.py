"""Configuration for the triage job."""

from board_triage.config.settings import StoreConfig, TriageConfig, TriageSettings

__all__ = ["StoreConfig", "TriageConfig", "TriageSettings"]
