"""Scanners that read package lists from the local environment."""

from pipmaster.scanners.pip import PipScanner

__all__ = ["PipScanner"]
