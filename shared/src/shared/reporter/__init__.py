"""Centralized logging for Monnayeur components."""

from shared.reporter.system_reporter import SystemReporter

__all__ = ["SystemReporter"]
