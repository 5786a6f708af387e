"""
Test Suite for FinanceFlow Trends

Test Structure:
- fixtures/: Synthetic data builders
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI workflow tests

All test data is synthetic.
"""
