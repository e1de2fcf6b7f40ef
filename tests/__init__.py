"""
Test suite for embedkit.

This package contains all tests organized by component:
- test_core/: Tests for parameters, method descriptors and the dispatcher
- test_neighbors/: Tests for neighbor search strategies
- test_eigen/: Tests for eigensolvers
- test_algorithms/: Tests for the embedding routines
- test_utils/: Tests for logging helpers
"""
