"""Tenant feature utilities."""

from .validation import DomainValidationRules

__all__ = ["DomainValidationRules"]
