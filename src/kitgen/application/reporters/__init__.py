"""Reporters: format extracted models for humans and machines."""

from kitgen.application.reporters.json import InterfaceJsonReporter

__all__ = ["InterfaceJsonReporter"]
