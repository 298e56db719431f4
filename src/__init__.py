"""
三國志将棋
"""
