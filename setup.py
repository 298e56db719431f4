"""
三國志将棋プロジェクトのセットアップスクリプト
"""

from setuptools import setup, find_packages

setup(
    name="sangokushi-shogi",
    version="1.0.0",
    description="三國志将棋 - ルールエンジンとミニマックス探索AI",
    author="",
    packages=find_packages(include=["src", "src.*"]),
    package_dir={"": "."},
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.118.0",
        "uvicorn>=0.37.0",
        "pydantic>=2.11.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "httpx>=0.27.0",
        ],
    },
)
