"""Rendering of scans and diffs for humans."""
