"""Feature Modules"""
