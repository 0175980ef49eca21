#!/usr/bin/env python3
"""
Setup script for the Hand Sign Gesture Scoring Engine
"""

from setuptools import find_packages, setup

setup(
    name="handsign",
    version="0.1.0",
    description="Scores 21-point hand landmarks against weighted finger curl/direction gesture templates",
    packages=find_packages(include=["handsign", "handsign.*"]),
    package_data={"handsign": ["config.default.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pyyaml",
    ],
    extras_require={
        # live camera input via MediaPipe Hands
        "tracker": ["mediapipe<0.10.30", "opencv-python"],
        "test": ["pytest"],
    },
)
