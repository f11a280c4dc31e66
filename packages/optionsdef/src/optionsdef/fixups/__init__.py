from .base import Fixup, FixupStage, LoggingFixup, population_summary

__all__ = ["Fixup", "FixupStage", "LoggingFixup", "population_summary"]
