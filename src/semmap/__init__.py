"""semmap — semantic map generator, validator and updater for codebases."""

__version__ = "0.1.0"
