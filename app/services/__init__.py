"""
Services - MongoDB stores and the company/job relationship logic.
"""
