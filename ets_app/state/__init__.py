"""
Position state machine module.

Evaluates bars against the current position and applies the resulting
intents: noPosition → open → closed → noPosition.
"""
