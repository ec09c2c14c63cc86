"""Deterministic case enumeration engine.

The fold in ``enumerate_cases`` is generic over the case representation;
concrete representations live in ``strategies`` and are chosen by the caller.
"""
