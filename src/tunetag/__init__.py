# ABOUTME: tunetag - online metadata lookup for an audio tag editor.
# ABOUTME: Exposes the package version used by the CLI and the HTTP User-Agent.

__version__ = "0.1.0"
