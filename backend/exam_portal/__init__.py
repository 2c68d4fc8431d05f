"""Exam Portal - study materials and exam preparation backend"""

__version__ = "1.0.0"
