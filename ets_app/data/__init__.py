"""
Market and macro data module.

Defines the immutable price bar and macro snapshot models, bar sequence
validation, and the merge of independently fetched macro series.
"""
