"""Reports module - read-only exports of profile and session data."""

from .profile_report import render_profile_report, report_filename, sanitize_ascii

__all__ = ['render_profile_report', 'report_filename', 'sanitize_ascii']
