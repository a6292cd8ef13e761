"""Proxier configuration properties."""

from proxier.config.properties import LoggingProperties, SynthesisProperties

__all__ = ["LoggingProperties", "SynthesisProperties"]
