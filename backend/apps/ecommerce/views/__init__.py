"""
API views for the e-commerce module
"""
