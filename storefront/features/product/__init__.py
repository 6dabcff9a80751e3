"""Product Feature"""
