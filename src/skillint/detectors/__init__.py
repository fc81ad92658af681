"""Detector package for Skillint."""

from .base import CorpusDetector, Detector
from .context import AnchorIndex, LintContext
from .registry import build_detectors, rule_catalog

__all__ = ["AnchorIndex", "CorpusDetector", "Detector", "LintContext", "build_detectors", "rule_catalog"]
