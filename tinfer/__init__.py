"""Constraint-based type inference for a tiny functional language.

Expressions are built from the nodes in tinfer.expressions, and their types
are inferred by tinfer.typecheck.infer_types.
"""

version = '0.1.0'
