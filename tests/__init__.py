# tests/__init__.py
"""
AdsorbLab Sim - Test Suite
==========================

Test suite covering:
- Unit tests for the response model, registries and validation
- Inverse design (optimizer) and attribution behaviour
- Response sweeps and validation-experiment tables
- Command line interface and cross-module workflows

Run all tests:
    pytest tests/ -v

Run with coverage:
    pytest tests/ --cov=adsorblab_sim --cov-report=html

Run specific test file:
    pytest tests/test_models.py -v
"""
