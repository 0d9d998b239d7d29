"""
Macro cycle module.

Classifies chronological macro snapshots into expansion, peak, contraction
and recovery stages.
"""
