"""Order Feature"""
