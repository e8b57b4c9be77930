"""
Core - configuration, logging, authentication and domain errors.
"""
