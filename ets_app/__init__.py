"""
ETS App - Economic Trade System signal engine

Computes technical indicators over price bars, turns them into BUY/SELL/HOLD
recommendations with a single stop-loss protected position, replays the same
rules historically, and classifies macro-economic data into cycle stages that
can gate entries.
"""

__version__ = "0.1.0"
__author__ = "ETS Team"
