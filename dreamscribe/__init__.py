"""
Dreamscribe - AI Core for a Dream Journaling App

Generative text client with pacing, timeouts and retries, plus the mood
classifier, narrative rewriter/analyzer and dream assistant built on it.
"""

__version__ = "0.1.0"
__author__ = "Dreamscribe Team"
