"""Deterministic analyzers: pollutant classification and tender risk scoring."""
