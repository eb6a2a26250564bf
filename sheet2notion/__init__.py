"""
sheet2notion - sync spreadsheet rows into a Notion database, one row per page.
"""

__version__ = "0.1.0"
