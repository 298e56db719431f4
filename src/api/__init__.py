"""
三國志将棋 ウェブAPI パッケージ
"""
