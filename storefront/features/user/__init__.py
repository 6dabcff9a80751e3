"""User Feature"""
