"""
PySide6 dashboard GUI: the rendered report plus "Download as PDF".
"""
