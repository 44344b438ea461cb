"""Core label generation logic for the 3-class tick classifier.

This package contains pure business logic with no I/O dependencies
(no files, no network access). Batch generation, tick loading and
reporting live in labelgen/.
"""
