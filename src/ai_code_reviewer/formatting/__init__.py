"""
Report Formatting

This module provides plain-text rendering of analysis results and
GitHub repository/PR information for the command line.
"""

from .report import ReportFormatter

__all__ = ['ReportFormatter']
