"""
Activity pipeline reconstruction service.
"""
__version__ = "1.0.0"
