"""
Maintenance business layer
"""
