"""
API version 1.
"""
