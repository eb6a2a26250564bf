"""
Logging and metrics for sheet2notion.
"""
