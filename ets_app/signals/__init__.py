"""
Signal generation module.

Turns indicator snapshots into BUY/SELL/HOLD recommendations and sizes
positions.
"""
