"""
MRR engine test suite.

Unit tests for pricing, discounts, resolution and aggregation, plus the
Stripe source, report rendering and CLI with Stripe patched out.
"""
