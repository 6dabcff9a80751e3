"""Auth Feature"""
