"""LLM Media Matcher.

Identifies foreign-language movie and TV titles and matches EPG channel
ids to IPTV channel names by delegating judgment to a configurable LLM
backend (OpenAI or Ollama), with confidence-gated, batch-isolated results.
"""

try:
    # Try to get version from setuptools_scm (when installed from git)
    from ._version import version as __version__
except ImportError:
    __version__ = "0.1.0-dev"
