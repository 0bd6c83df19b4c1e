"""
PT Floor System Optimizer Report Module

This module provides HTML report generation for optimization results.
"""

from .report_generator import ReportGenerator, generate_report

__all__ = ['ReportGenerator', 'generate_report']
