"""
API Routes Package
"""
