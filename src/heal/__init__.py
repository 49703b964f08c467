"""
Heal Here - AI Companion Backend

This package provides the backend services for the Heal Here mobile
wellness app: the AI companion chat with crisis detection, mood
analytics, and a set of AI-assisted wellness tools.

IMPORTANT: Crisis handling is safety-critical. Every crisis reply
must carry the 988 Suicide & Crisis Lifeline disclosure.
"""

__version__ = "0.1.0"
__author__ = "Heal Here Engineering Team"
