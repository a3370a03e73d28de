"""
Core package: structural extraction framework and book domain records.
"""
