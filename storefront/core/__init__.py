"""Core Module"""
