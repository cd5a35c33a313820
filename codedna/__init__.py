"""
CodeDNA: dependency graph construction and architectural analytics for codebases.
"""

__version__ = "1.0.0"
