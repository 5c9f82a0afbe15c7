"""
Loam: the evaluation core of a small dynamically-typed scripting language.
"""
