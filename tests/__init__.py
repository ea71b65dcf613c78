"""
RPS-Cam Test Suite

- unit/: Unit tests for individual components
- integration/: The live loop, predictor and sample buffer working together
"""
