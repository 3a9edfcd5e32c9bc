"""
Serializers for the e-commerce module.
"""
