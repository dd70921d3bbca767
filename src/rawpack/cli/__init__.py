"""
Command-line interface for rawpack.
"""

import logging

# Keep Pillow's plugin probing quiet in CLI output
logging.getLogger('PIL').setLevel(logging.WARNING)
