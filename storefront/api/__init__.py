"""API Layer"""
