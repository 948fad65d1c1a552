"""Transit tracking engine for step-by-step bus navigation."""

__version__ = "0.1.0"
