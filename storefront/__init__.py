"""Storefront e-commerce backend"""
