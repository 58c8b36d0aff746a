"""Reusable patterns behind the bookstore checkout.

Each module is self-contained: a pure-function rules engine, an enum
workflow state machine, and frozen-dataclass domain configuration.
"""
