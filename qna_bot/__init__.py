"""
QnA Maker bot for the Bot Framework.

This package provides a single-turn bot that answers each user message
with the top match from a QnA Maker knowledge base.
"""

__version__ = "1.0.0"
__author__ = "QnA Bot Team"
