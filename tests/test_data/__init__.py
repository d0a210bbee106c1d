"""
Map input tests: text parsing and file loading.
"""
