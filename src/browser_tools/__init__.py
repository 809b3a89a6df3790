"""
Browser Tools

Command-line tools that drive a running Chrome over the DevTools protocol:
navigation, script evaluation, screenshots, cookies and an interactive
element picker.
"""

__version__ = "0.1.0"
