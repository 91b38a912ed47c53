"""
Nether CLI - Command-line interface for the zone monitor.

Usage:
    nether run config/nether.yaml
    nether run config/nether.yaml --source 1 --no-audio
    nether validate-config config/nether.yaml
"""

__version__ = "1.0.0"
