"""
Bestiary power package.

Evaluates the combat power of every monster in a bestiary, normalizes it
against the other monsters found at the same depth and, on request, derives
level, experience and rarity from the result.
"""
