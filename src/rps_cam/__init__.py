"""
RPS camera side: frame preprocessing, capture, live detection and sample collection.
"""
