"""
exprevolve - evolve arithmetic expressions (digits and + - * / **) whose
value matches a target number.
"""

__version__ = "0.1.0"
