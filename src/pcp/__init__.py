"""
pcp - Prompt Composition Processor

Compiles a YAML document describing files, nested documents, shell command
output and literal text into one deterministic text stream for AI agents.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
